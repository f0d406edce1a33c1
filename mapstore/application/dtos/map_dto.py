# mapstore/application/dtos/map_dto.py
#
# Client-facing shapes and the client <-> server mapping.
#
# Design decisions:
#   - The frontend speaks camelCase JSON (isRoot, fontMaxSize, deletedAt).
#     Every DTO uses a camelCase alias generator and also accepts the
#     snake_case field names, so tests and Python callers can build DTOs
#     directly.
#   - Nested content (coordinates, colors, font, image, link) stays nested
#     on the wire and is flattened only by the DuckDB repository.
#   - An empty-string parent from the client means "no parent".
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from mapstore.domain.map.entities import AdminMapEntry, MindMap, Node, NodeImport
from mapstore.domain.map.value_objects import (
    Coordinates,
    MapOptions,
    NodeColors,
    NodeFont,
    NodeImage,
)


class ClientModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CoordinatesDTO(ClientModel):
    x: float = 0.0
    y: float = 0.0


class ColorsDTO(ClientModel):
    name: str | None = None
    background: str | None = None
    branch: str | None = None


class FontDTO(ClientModel):
    size: int | None = None
    style: str | None = None
    weight: str | None = None


class ImageDTO(ClientModel):
    src: str | None = None
    size: int | None = None


class LinkDTO(ClientModel):
    href: str | None = None


class ClientNodeBasicsDTO(ClientModel):
    """Descritor minimo de no raiz enviado na criacao do mapa."""
    name: str | None = None
    colors: ColorsDTO = ColorsDTO()
    font: FontDTO = FontDTO()
    image: ImageDTO = ImageDTO()

    def to_root_node(self, map_id: str, node_id: str) -> Node:
        return Node(
            id=node_id,
            node_map_id=map_id,
            node_parent_id=None,
            root=True,
            detached=False,
            name=self.name,
            coordinates=Coordinates(0.0, 0.0),
            colors=NodeColors(self.colors.name, self.colors.background, self.colors.branch),
            font=NodeFont(self.font.size, self.font.style, self.font.weight),
            image=NodeImage(self.image.src, self.image.size),
        )


class ClientNodeDTO(ClientModel):
    id: str
    parent: str | None = None
    is_root: bool = False
    detached: bool = False
    name: str | None = None
    coordinates: CoordinatesDTO = CoordinatesDTO()
    colors: ColorsDTO = ColorsDTO()
    font: FontDTO = FontDTO()
    image: ImageDTO = ImageDTO()
    link: LinkDTO = LinkDTO()
    locked: bool = False
    k: float = 1.0

    def to_domain(self, map_id: str) -> Node:
        return Node(
            id=self.id,
            node_map_id=map_id,
            node_parent_id=self.parent or None,
            root=self.is_root,
            detached=self.detached,
            name=self.name,
            coordinates=Coordinates(self.coordinates.x, self.coordinates.y),
            colors=NodeColors(self.colors.name, self.colors.background, self.colors.branch),
            font=NodeFont(self.font.size, self.font.style, self.font.weight),
            image=NodeImage(self.image.src, self.image.size),
            link_href=self.link.href,
            locked=self.locked,
            k=self.k,
        )

    @classmethod
    def from_domain(cls, node: Node) -> ClientNodeDTO:
        return cls(
            id=node.id,
            parent=node.node_parent_id,
            is_root=node.root,
            detached=node.detached,
            name=node.name,
            coordinates=CoordinatesDTO(x=node.coordinates.x, y=node.coordinates.y),
            colors=ColorsDTO(
                name=node.colors.name,
                background=node.colors.background,
                branch=node.colors.branch,
            ),
            font=FontDTO(size=node.font.size, style=node.font.style, weight=node.font.weight),
            image=ImageDTO(src=node.image.src, size=node.image.size),
            link=LinkDTO(href=node.link_href),
            locked=node.locked,
            k=node.k,
        )


class ClientMapOptionsDTO(ClientModel):
    font_max_size: int = 70
    font_min_size: int = 15
    font_increment: int = 5

    def to_domain(self) -> MapOptions:
        return MapOptions(
            font_max_size=self.font_max_size,
            font_min_size=self.font_min_size,
            font_increment=self.font_increment,
        )

    @classmethod
    def from_domain(cls, options: MapOptions) -> ClientMapOptionsDTO:
        return cls(
            font_max_size=options.font_max_size,
            font_min_size=options.font_min_size,
            font_increment=options.font_increment,
        )


class ClientMapDTO(ClientModel):
    """Mapa como o cliente o ve. Na entrada (PUT) so uuid e data sao usados."""
    uuid: str
    data: list[ClientNodeDTO] = []
    name: str | None = None
    last_modified: datetime | None = None
    created_at: datetime | None = None
    delete_after_days: int | None = None
    deleted_at: datetime | None = None
    options: ClientMapOptionsDTO = ClientMapOptionsDTO()

    @classmethod
    def from_domain(
        cls,
        mind_map: MindMap,
        nodes: list[Node],
        deleted_at: datetime,
        delete_after_days: int,
    ) -> ClientMapDTO:
        return cls(
            uuid=mind_map.id,
            data=[ClientNodeDTO.from_domain(n) for n in nodes],
            name=mind_map.name,
            last_modified=mind_map.last_modified,
            created_at=mind_map.created_at,
            delete_after_days=delete_after_days,
            deleted_at=deleted_at,
            options=ClientMapOptionsDTO.from_domain(mind_map.options),
        )


class CreateMapRequestDTO(ClientModel):
    root_node: ClientNodeBasicsDTO | None = None


class AdminMapEntryDTO(ClientModel):
    id: str
    admin_id: str
    modification_secret: str
    ttl: datetime
    root_name: str | None = None

    @classmethod
    def from_domain(cls, entry: AdminMapEntry) -> AdminMapEntryDTO:
        return cls(
            id=entry.id,
            admin_id=entry.admin_id,
            modification_secret=entry.modification_secret,
            ttl=entry.ttl,
            root_name=entry.root_name,
        )


class NodeImportDTO(ClientModel):
    inserted: list[str]
    rejected: list[str]

    @classmethod
    def from_domain(cls, result: NodeImport) -> NodeImportDTO:
        return cls(
            inserted=[n.id for n in result.inserted],
            rejected=[n.id for n in result.rejected],
        )
