# mapstore/application/services/map_service.py
#
# Map Service: the imperative shell around map and node storage.
#
# Design decisions:
#   - Every collaborator is a constructor argument: both repositories, the
#     settings object providing delete_after_days, the logger, the clock and
#     the transaction factory. Tests build the service directly without any
#     process-wide setup.
#   - Absence is an explicit None (find_map, export_map_to_client,
#     update_node, remove_node, update_map, update_map_options). Malformed
#     input raises a ValueError subclass from mapstore.domain.map.errors.
#   - Batch insertion is an ordered loop. A node may name an earlier node of
#     the same batch as its parent, so the loop must stay sequential.
#   - Nodes whose parent cannot be resolved are dropped from a batch and
#     logged at WARNING. import_nodes also returns them, so callers can
#     report the rejection list; add_nodes keeps returning only the inserted
#     nodes.
#   - update_map, delete_map, create_empty_map and the sweep run inside one
#     transaction each, so readers never observe a half-rebuilt tree.
#
# Invariants:
#   - A stored node is root, detached, or its parent existed in the same map
#     when it was inserted. Later parent deletions do not re-validate it.
#   - A detached node never carries a parent.
from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable
from contextlib import AbstractContextManager, nullcontext
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Protocol

from mapstore.domain.map.entities import AdminMapEntry, MindMap, Node, NodeImport
from mapstore.domain.map.errors import InvalidTreeReferenceError, MissingArgumentError
from mapstore.domain.map.repository import MapRepository, NodeRepository
from mapstore.domain.map.retention import compute_deletion_deadline, newest_modification
from mapstore.domain.map.tree import ensure_not_detached_with_parent, is_parent_satisfied
from mapstore.domain.map.value_objects import MapId, MapOptions

from ..dtos.map_dto import ClientMapDTO, ClientNodeBasicsDTO, ClientNodeDTO

LOGGER = logging.getLogger(__name__)

DEFAULT_RETENTION_DAYS = 30


class RetentionSettings(Protocol):
    @property
    def delete_after_days(self) -> int: ...


TransactionFactory = Callable[[], AbstractContextManager[object]]


class MapService:
    """Operacoes de mapas e nos: valida a arvore na insercao e aplica a retencao.

    Nao sabe nada de HTTP; rotas e o sweeper usam a mesma instancia.
    """

    def __init__(
        self,
        map_repo: MapRepository,
        node_repo: NodeRepository,
        settings: RetentionSettings,
        logger: logging.Logger | None = None,
        clock: Callable[[], datetime] = datetime.now,
        transaction: TransactionFactory = nullcontext,
    ) -> None:
        self._map_repo = map_repo
        self._node_repo = node_repo
        self._settings = settings
        self._logger = logger or LOGGER
        self._clock = clock
        self._transaction = transaction

    # ------------------------------------------------------------------
    # Maps
    # ------------------------------------------------------------------

    def find_map(self, uuid_raw: str) -> MindMap | None:
        """Raises MalformedUUIDError antes de qualquer acesso ao banco."""
        map_id = MapId(uuid_raw)
        return self._map_repo.find_by_id(map_id)

    def export_map_to_client(self, uuid_raw: str) -> ClientMapDTO | None:
        mind_map = self.find_map(uuid_raw)
        if mind_map is None:
            return None

        nodes = self.find_nodes(mind_map.id)
        days = self._settings.delete_after_days
        return ClientMapDTO.from_domain(
            mind_map,
            nodes,
            self.compute_map_deleted_at(mind_map, days),
            days,
        )

    def create_empty_map(self, root_node: ClientNodeBasicsDTO | None = None) -> MindMap:
        now = self._clock()
        mind_map = MindMap(
            id=MapId.generate().valor,
            last_modified=now,
            created_at=now,
            name=root_node.name if root_node else None,
            options=MapOptions(),
            admin_id=str(uuid.uuid4()),
            modification_secret=str(uuid.uuid4()),
        )

        with self._transaction():
            self._map_repo.insert(mind_map)
            if root_node is not None:
                root = root_node.to_root_node(mind_map.id, str(uuid.uuid4()))
                self._node_repo.insert(replace(root, last_modified=now, created_at=now))

        return mind_map

    def export_admin_entry(self, mind_map: MindMap, root_name: str | None = None) -> AdminMapEntry:
        """Dados de administracao entregues a quem criou o mapa. ttl = prazo de exclusao."""
        return AdminMapEntry(
            id=mind_map.id,
            admin_id=mind_map.admin_id or "",
            modification_secret=mind_map.modification_secret or "",
            ttl=self.compute_map_deleted_at(mind_map, self._settings.delete_after_days),
            root_name=root_name,
        )

    def update_map(self, client_map: ClientMapDTO) -> MindMap | None:
        """Reconstroi a arvore: apaga todos os nos, reinsere os do cliente e carimba
        o last_modified do mapa, atomicamente."""
        map_id = MapId(client_map.uuid)

        with self._transaction():
            if self._map_repo.find_by_id(map_id) is None:
                return None
            # remove existing nodes, otherwise we end up with multiple roots
            self._node_repo.delete_by_map(map_id.valor)
            self.add_nodes_from_client(map_id.valor, client_map.data)
            self._map_repo.touch(map_id.valor, self._clock())

        return self._map_repo.find_by_id(map_id)

    def update_map_options(self, uuid_raw: str, options: MapOptions) -> MindMap | None:
        map_id = MapId(uuid_raw)
        self._map_repo.update_options(map_id.valor, options, self._clock())
        return self._map_repo.find_by_id(map_id)

    def delete_map(self, uuid_raw: str) -> None:
        map_id = MapId(uuid_raw)
        with self._transaction():
            self._node_repo.delete_by_map(map_id.valor)
            self._map_repo.delete(map_id.valor)

    # ------------------------------------------------------------------
    # Retention
    # ------------------------------------------------------------------

    def compute_map_deleted_at(self, mind_map: MindMap | None, retention_days: int) -> datetime:
        """Prazo de exclusao a partir do no mais recente (ou do proprio mapa, se vazio).

        Raises:
            MapNotFoundError: se mind_map for None.
        """
        newest_node = self._node_repo.newest_modification(mind_map.id) if mind_map else None
        last_modified = newest_modification(mind_map, newest_node)
        return compute_deletion_deadline(last_modified, retention_days)

    def find_outdated_maps(self, retention_days: int = DEFAULT_RETENTION_DAYS) -> list[str]:
        return self._map_repo.find_outdated_ids(self._clock() - timedelta(days=retention_days))

    def delete_outdated_maps(self, retention_days: int = DEFAULT_RETENTION_DAYS) -> int:
        """Apaga em lote os mapas cujo prazo de exclusao ja passou. Retorna quantos."""
        with self._transaction():
            outdated = self.find_outdated_maps(retention_days)
            if not outdated:
                return 0
            self._node_repo.delete_by_maps(outdated)
            deleted = self._map_repo.delete_many(outdated)

        self._logger.info("Deleted %d outdated maps (retention %d days)", deleted, retention_days)
        return deleted

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def find_nodes(self, map_id: str) -> list[Node]:
        return self._node_repo.list_by_map(map_id)

    def node_exists(self, map_id: str, node_id: str) -> bool:
        if not map_id or not node_id:
            return False
        return self._node_repo.exists(map_id, node_id)

    def add_node(self, map_id: str, node: Node | None) -> Node:
        """Idempotente por id: se o no ja existe no mapa, devolve o registro existente."""
        if not map_id or node is None:
            raise MissingArgumentError("map_id and node are required")
        ensure_not_detached_with_parent(node)

        existing = self._node_repo.find_one(map_id, node.id)
        if existing is not None:
            return existing

        now = self._clock()
        return self._node_repo.insert(
            replace(
                node,
                node_map_id=map_id,
                last_modified=node.last_modified or now,
                created_at=now,
            )
        )

    def import_nodes(self, map_id: str, nodes: Iterable[Node]) -> NodeImport:
        if not map_id:
            raise MissingArgumentError("map_id is required")

        inserted: list[Node] = []
        rejected: list[Node] = []
        for node in nodes:
            if not is_parent_satisfied(map_id, node, self.node_exists):
                self._logger.warning(
                    "Parent with id %s does not exist for node %s and map %s",
                    node.node_parent_id,
                    node.id,
                    map_id,
                )
                rejected.append(node)
                continue
            try:
                inserted.append(self.add_node(map_id, node))
            except InvalidTreeReferenceError:
                self._logger.warning(
                    "Detached node %s declares parent %s in map %s",
                    node.id,
                    node.node_parent_id,
                    map_id,
                )
                rejected.append(node)

        return NodeImport(inserted=tuple(inserted), rejected=tuple(rejected))

    def add_nodes(self, map_id: str, nodes: Iterable[Node]) -> list[Node]:
        return list(self.import_nodes(map_id, nodes).inserted)

    def import_nodes_from_client(self, map_id: str, client_nodes: Iterable[ClientNodeDTO]) -> NodeImport:
        return self.import_nodes(map_id, [c.to_domain(map_id) for c in client_nodes])

    def add_nodes_from_client(self, map_id: str, client_nodes: Iterable[ClientNodeDTO]) -> list[Node]:
        return list(self.import_nodes_from_client(map_id, client_nodes).inserted)

    def update_node(self, map_id: str, client_node: ClientNodeDTO) -> Node | None:
        existing = self._node_repo.find_one(map_id, client_node.id)
        if existing is None:
            return None

        merged = replace(
            client_node.to_domain(map_id),
            order_number=existing.order_number,
            created_at=existing.created_at,
            last_modified=self._clock(),
        )
        ensure_not_detached_with_parent(merged)
        return self._node_repo.save(merged)

    def remove_node(self, client_node: ClientNodeDTO, map_id: str) -> Node | None:
        existing = self._node_repo.find_one(map_id, client_node.id)
        if existing is None:
            return None

        self._node_repo.delete_one(map_id, existing.id)
        return existing
