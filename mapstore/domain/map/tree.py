# mapstore/domain/map/tree.py
#
# Tree-validity checks applied when a node is inserted.
#
# Design decisions:
#   - The existence lookup is passed in as a callable so the check stays free
#     of storage imports. The repository's node_exists fits the signature.
#   - The lookup is only invoked when the node is neither root nor detached.
#   - Validity is checked once, at insertion. Removing a parent later does not
#     re-validate its children.
from __future__ import annotations

from collections.abc import Callable

from .entities import Node
from .errors import InvalidTreeReferenceError

NodeExists = Callable[[str, str], bool]


def is_parent_satisfied(map_id: str, node: Node, node_exists: NodeExists) -> bool:
    """True se o no e root, detached, ou o pai existe no mesmo mapa."""
    if node.root or node.detached:
        return True
    if not map_id or not node.node_parent_id:
        return False
    return node_exists(map_id, node.node_parent_id)


def ensure_not_detached_with_parent(node: Node) -> None:
    if node.detached and node.node_parent_id:
        raise InvalidTreeReferenceError(
            f"Detached node {node.id} must not declare parent {node.node_parent_id}"
        )
