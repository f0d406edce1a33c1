# mapstore/domain/map/repository.py
from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .entities import MindMap, Node
from .value_objects import MapId, MapOptions


class MapRepository(Protocol):
    def insert(self, mind_map: MindMap) -> MindMap: ...
    def find_by_id(self, map_id: MapId) -> MindMap | None: ...
    def update_options(self, map_id: str, options: MapOptions, modified_at: datetime) -> None: ...
    def touch(self, map_id: str, modified_at: datetime) -> None: ...
    def delete(self, map_id: str) -> None: ...
    def find_outdated_ids(self, cutoff: datetime) -> list[str]: ...
    def delete_many(self, map_ids: list[str]) -> int: ...


class NodeRepository(Protocol):
    def find_one(self, map_id: str, node_id: str) -> Node | None: ...
    def exists(self, map_id: str, node_id: str) -> bool: ...
    def insert(self, node: Node) -> Node: ...
    def save(self, node: Node) -> Node: ...
    def delete_one(self, map_id: str, node_id: str) -> None: ...
    def delete_by_map(self, map_id: str) -> None: ...
    def delete_by_maps(self, map_ids: list[str]) -> None: ...
    def list_by_map(self, map_id: str) -> list[Node]: ...
    def newest_modification(self, map_id: str) -> datetime | None: ...
