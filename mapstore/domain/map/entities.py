# mapstore/domain/map/entities.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .value_objects import Coordinates, MapOptions, NodeColors, NodeFont, NodeImage


@dataclass(frozen=True)
class Node:
    """Elemento da arvore. Pertence a exatamente um mapa (node_map_id).

    Invariante de arvore: root, detached, ou pai resolvivel no mesmo mapa.
    Validada na insercao (ver tree.is_parent_satisfied), nunca depois."""
    id: str
    node_map_id: str | None = None
    node_parent_id: str | None = None
    root: bool = False
    detached: bool = False
    name: str | None = None
    coordinates: Coordinates = field(default_factory=Coordinates)
    colors: NodeColors = field(default_factory=NodeColors)
    font: NodeFont = field(default_factory=NodeFont)
    image: NodeImage = field(default_factory=NodeImage)
    link_href: str | None = None
    locked: bool = False
    k: float = 1.0
    order_number: int | None = None  # atribuido pelo banco (ordem de insercao)
    last_modified: datetime | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class MindMap:
    """Aggregate Root. Prazo de exclusao e janela de retencao sao calculados,
    nunca persistidos."""
    id: str
    last_modified: datetime
    created_at: datetime
    name: str | None = None
    options: MapOptions = field(default_factory=MapOptions)
    admin_id: str | None = None
    modification_secret: str | None = None


@dataclass(frozen=True)
class AdminMapEntry:
    """Dados entregues ao criador do mapa. Nao e alterado pelo core."""
    id: str
    admin_id: str
    modification_secret: str
    ttl: datetime
    root_name: str | None = None


@dataclass(frozen=True)
class NodeImport:
    """Resultado de uma importacao em lote: inseridos e rejeitados, na ordem processada."""
    inserted: tuple[Node, ...] = ()
    rejected: tuple[Node, ...] = ()
