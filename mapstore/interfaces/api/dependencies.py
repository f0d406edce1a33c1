# mapstore/interfaces/api/dependencies.py
from collections.abc import Iterator
from functools import partial

from mapstore.application.services.map_service import MapService
from mapstore.infrastructure.config import get_settings
from mapstore.infrastructure.duckdb_connection import get_connection, transaction
from mapstore.infrastructure.repositories.duckdb_map_repo import DuckDBMapRepo
from mapstore.infrastructure.repositories.duckdb_node_repo import DuckDBNodeRepo


def get_map_service() -> Iterator[MapService]:
    # cursor proprio por request: transacoes de requests concorrentes nao se misturam
    cursor = get_connection().cursor()
    try:
        yield MapService(
            map_repo=DuckDBMapRepo(cursor),
            node_repo=DuckDBNodeRepo(cursor),
            settings=get_settings(),
            transaction=partial(transaction, cursor),
        )
    finally:
        cursor.close()
