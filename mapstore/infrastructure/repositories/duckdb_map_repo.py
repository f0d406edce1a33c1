# mapstore/infrastructure/repositories/duckdb_map_repo.py
from __future__ import annotations

import json
from datetime import datetime

import duckdb

from mapstore.domain.map.entities import MindMap
from mapstore.domain.map.value_objects import MapId, MapOptions

_COLUMNS = "id, name, admin_id, modification_secret, options, last_modified, created_at"


class DuckDBMapRepo:
    def __init__(self, conn: duckdb.DuckDBPyConnection) -> None:
        self._conn = conn

    def insert(self, mind_map: MindMap) -> MindMap:
        self._conn.execute(
            f"INSERT INTO maps ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",  # noqa: S608
            [
                mind_map.id,
                mind_map.name,
                mind_map.admin_id,
                mind_map.modification_secret,
                json.dumps(mind_map.options.to_dict()),
                mind_map.last_modified,
                mind_map.created_at,
            ],
        )
        return mind_map

    def find_by_id(self, map_id: MapId) -> MindMap | None:
        row = self._conn.execute(
            f"SELECT {_COLUMNS} FROM maps WHERE id = ?",  # noqa: S608
            [map_id.valor],
        ).fetchone()
        if row is None:
            return None
        return self._hidratar(row)

    def update_options(self, map_id: str, options: MapOptions, modified_at: datetime) -> None:
        self._conn.execute(
            "UPDATE maps SET options = ?, last_modified = ? WHERE id = ?",
            [json.dumps(options.to_dict()), modified_at, map_id],
        )

    def touch(self, map_id: str, modified_at: datetime) -> None:
        self._conn.execute("UPDATE maps SET last_modified = ? WHERE id = ?", [modified_at, map_id])

    def delete(self, map_id: str) -> None:
        """So a linha do mapa; os nos sao removidos pelo NodeRepository (DuckDB nao faz cascade)."""
        self._conn.execute("DELETE FROM maps WHERE id = ?", [map_id])

    def find_outdated_ids(self, cutoff: datetime) -> list[str]:
        """LEFT JOIN de cada mapa com o max(last_modified) dos seus nos.

        Um mapa esta vencido quando o no mais recente e anterior a cutoff, ou,
        sem nos, quando o proprio last_modified do mapa e anterior a cutoff.
        cutoff = agora - dias de retencao."""
        rows = self._conn.execute(
            """
            SELECT m.id
            FROM maps m
            LEFT JOIN (
                SELECT node_map_id, max(last_modified) AS last_updated_at
                FROM nodes
                GROUP BY node_map_id
            ) newest ON newest.node_map_id = m.id
            WHERE newest.last_updated_at < ?
               OR (newest.last_updated_at IS NULL AND m.last_modified < ?)
            ORDER BY m.id
        """,
            [cutoff, cutoff],
        ).fetchall()
        return [str(r[0]) for r in rows]

    def delete_many(self, map_ids: list[str]) -> int:
        if not map_ids:
            return 0
        row = self._conn.execute(
            "DELETE FROM maps WHERE list_contains(?::VARCHAR[], id)",
            [map_ids],
        ).fetchone()
        return int(row[0]) if row else 0

    def _hidratar(self, row: tuple) -> MindMap:  # type: ignore[type-arg]
        """Colunas: id(0), name(1), admin_id(2), modification_secret(3),
        options(4), last_modified(5), created_at(6)"""
        return MindMap(
            id=str(row[0]),
            name=row[1],
            admin_id=row[2],
            modification_secret=row[3],
            options=MapOptions.from_dict(json.loads(row[4]) if row[4] else None),
            last_modified=row[5],
            created_at=row[6],
        )
