# tests/integration/conftest.py
from __future__ import annotations

from collections.abc import Generator
from dataclasses import dataclass
from datetime import datetime, timedelta
from functools import partial

import duckdb
import pytest
from fastapi.testclient import TestClient

from mapstore.application.services.map_service import MapService
from mapstore.infrastructure.duckdb_connection import apply_schema, transaction
from mapstore.infrastructure.repositories.duckdb_map_repo import DuckDBMapRepo
from mapstore.infrastructure.repositories.duckdb_node_repo import DuckDBNodeRepo

NOW = datetime(2026, 3, 1, 12, 0, 0)


class FrozenClock:
    """Relogio controlado pelos testes. Chamavel como datetime.now."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def days_ago(self, days: int) -> datetime:
        return NOW - timedelta(days=days)


@dataclass(frozen=True)
class RetentionStub:
    delete_after_days: int = 30


@pytest.fixture()
def test_db() -> Generator[duckdb.DuckDBPyConnection, None, None]:
    """DuckDB in-memory com schema aplicado, isolado por teste."""
    conn = duckdb.connect(":memory:")
    apply_schema(conn)
    yield conn
    conn.close()


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture()
def node_repo(test_db: duckdb.DuckDBPyConnection) -> DuckDBNodeRepo:
    return DuckDBNodeRepo(test_db)


@pytest.fixture()
def map_repo(test_db: duckdb.DuckDBPyConnection) -> DuckDBMapRepo:
    return DuckDBMapRepo(test_db)


@pytest.fixture()
def service(
    test_db: duckdb.DuckDBPyConnection,
    map_repo: DuckDBMapRepo,
    node_repo: DuckDBNodeRepo,
    clock: FrozenClock,
) -> MapService:
    return MapService(
        map_repo=map_repo,
        node_repo=node_repo,
        settings=RetentionStub(),
        clock=clock,
        transaction=partial(transaction, test_db),
    )


@pytest.fixture()
def client(test_db: duckdb.DuckDBPyConnection) -> Generator[TestClient, None, None]:
    """TestClient do FastAPI com DuckDB in-memory injetado."""
    from mapstore.infrastructure import duckdb_connection
    duckdb_connection.set_connection(test_db)

    from mapstore.infrastructure.config import get_settings
    get_settings.cache_clear()

    from mapstore.interfaces.api.main import app
    with TestClient(app) as c:
        yield c

    duckdb_connection.set_connection(None)
