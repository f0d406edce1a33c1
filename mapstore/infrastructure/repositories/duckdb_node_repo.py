# mapstore/infrastructure/repositories/duckdb_node_repo.py
from __future__ import annotations

from datetime import datetime

import duckdb

from mapstore.domain.map.entities import Node
from mapstore.domain.map.value_objects import Coordinates, NodeColors, NodeFont, NodeImage

_COLUMNS = """id, node_map_id, node_parent_id, root, detached, name,
    coordinates_x, coordinates_y, colors_name, colors_background, colors_branch,
    font_size, font_style, font_weight, image_src, image_size, link_href,
    locked, k, order_number, last_modified, created_at"""


class DuckDBNodeRepo:
    def __init__(self, conn: duckdb.DuckDBPyConnection) -> None:
        self._conn = conn

    def find_one(self, map_id: str, node_id: str) -> Node | None:
        row = self._conn.execute(
            f"SELECT {_COLUMNS} FROM nodes WHERE node_map_id = ? AND id = ?",  # noqa: S608
            [map_id, node_id],
        ).fetchone()
        if row is None:
            return None
        return self._hidratar(row)

    def exists(self, map_id: str, node_id: str) -> bool:
        if not map_id or not node_id:
            return False
        row = self._conn.execute(
            "SELECT 1 FROM nodes WHERE node_map_id = ? AND id = ? LIMIT 1",
            [map_id, node_id],
        ).fetchone()
        return row is not None

    def list_by_map(self, map_id: str) -> list[Node]:
        """WHERE node_map_id = ? ORDER BY order_number ASC."""
        rows = self._conn.execute(
            f"SELECT {_COLUMNS} FROM nodes WHERE node_map_id = ? ORDER BY order_number ASC",  # noqa: S608
            [map_id],
        ).fetchall()
        return [self._hidratar(r) for r in rows]

    def insert(self, node: Node) -> Node:
        """INSERT com order_number vindo da sequencia; devolve o registro gravado."""
        row = self._conn.execute(
            f"""
            INSERT INTO nodes (
                id, node_map_id, node_parent_id, root, detached, name,
                coordinates_x, coordinates_y, colors_name, colors_background, colors_branch,
                font_size, font_style, font_weight, image_src, image_size, link_href,
                locked, k, last_modified, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            RETURNING {_COLUMNS}
        """,  # noqa: S608
            [node.id, node.node_map_id, *self._content_params(node), node.last_modified, node.created_at],
        ).fetchone()
        assert row is not None
        return self._hidratar(row)

    def save(self, node: Node) -> Node:
        """UPDATE de todos os campos de conteudo; order_number e created_at sao preservados."""
        row = self._conn.execute(
            f"""
            UPDATE nodes SET
                node_parent_id = ?, root = ?, detached = ?, name = ?,
                coordinates_x = ?, coordinates_y = ?,
                colors_name = ?, colors_background = ?, colors_branch = ?,
                font_size = ?, font_style = ?, font_weight = ?,
                image_src = ?, image_size = ?, link_href = ?, locked = ?, k = ?,
                last_modified = ?
            WHERE node_map_id = ? AND id = ?
            RETURNING {_COLUMNS}
        """,  # noqa: S608
            [*self._content_params(node), node.last_modified, node.node_map_id, node.id],
        ).fetchone()
        assert row is not None
        return self._hidratar(row)

    def delete_one(self, map_id: str, node_id: str) -> None:
        self._conn.execute(
            "DELETE FROM nodes WHERE node_map_id = ? AND id = ?",
            [map_id, node_id],
        )

    def delete_by_map(self, map_id: str) -> None:
        self._conn.execute("DELETE FROM nodes WHERE node_map_id = ?", [map_id])

    def delete_by_maps(self, map_ids: list[str]) -> None:
        if not map_ids:
            return
        self._conn.execute(
            "DELETE FROM nodes WHERE list_contains(?::VARCHAR[], node_map_id)",
            [map_ids],
        )

    def newest_modification(self, map_id: str) -> datetime | None:
        """max(last_modified) dos nos do mapa; None se o mapa nao tem nos."""
        row = self._conn.execute(
            "SELECT max(last_modified) FROM nodes WHERE node_map_id = ?",
            [map_id],
        ).fetchone()
        return row[0] if row else None

    @staticmethod
    def _content_params(node: Node) -> list[object]:
        return [
            node.node_parent_id,
            node.root,
            node.detached,
            node.name,
            node.coordinates.x,
            node.coordinates.y,
            node.colors.name,
            node.colors.background,
            node.colors.branch,
            node.font.size,
            node.font.style,
            node.font.weight,
            node.image.src,
            node.image.size,
            node.link_href,
            node.locked,
            node.k,
        ]

    def _hidratar(self, row: tuple) -> Node:  # type: ignore[type-arg]
        """Mapeia row do DuckDB para entidade de dominio.
        Colunas: id(0), node_map_id(1), node_parent_id(2), root(3), detached(4),
        name(5), coordinates_x(6), coordinates_y(7), colors_name(8),
        colors_background(9), colors_branch(10), font_size(11), font_style(12),
        font_weight(13), image_src(14), image_size(15), link_href(16),
        locked(17), k(18), order_number(19), last_modified(20), created_at(21)"""
        return Node(
            id=str(row[0]),
            node_map_id=str(row[1]),
            node_parent_id=str(row[2]) if row[2] else None,
            root=bool(row[3]),
            detached=bool(row[4]),
            name=row[5],
            coordinates=Coordinates(
                x=float(row[6]) if row[6] is not None else 0.0,
                y=float(row[7]) if row[7] is not None else 0.0,
            ),
            colors=NodeColors(name=row[8], background=row[9], branch=row[10]),
            font=NodeFont(size=row[11], style=row[12], weight=row[13]),
            image=NodeImage(src=row[14], size=row[15]),
            link_href=row[16],
            locked=bool(row[17]),
            k=float(row[18]),
            order_number=int(row[19]),
            last_modified=row[20],
            created_at=row[21],
        )
