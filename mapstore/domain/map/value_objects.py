# mapstore/domain/map/value_objects.py
from __future__ import annotations

import re
import uuid
from dataclasses import dataclass

from .errors import MalformedUUIDError

# so a forma 8-4-4-4-12 com hifens; sem chaves, prefixo urn ou espacos
_UUID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}\Z"
)


@dataclass(frozen=True)
class MapId:
    """Value Object imutavel para o UUID de um mapa. Valida o formato no construtor."""

    _valor: str  # sempre forma canonica, minusculas com hifens

    def __init__(self, raw: str) -> None:
        if not isinstance(raw, str) or _UUID_PATTERN.match(raw) is None:
            raise MalformedUUIDError("Invalid UUID")
        object.__setattr__(self, "_valor", raw.lower())

    @classmethod
    def generate(cls) -> MapId:
        return cls(str(uuid.uuid4()))

    @property
    def valor(self) -> str:
        return self._valor

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MapId):
            return NotImplemented
        return self._valor == other._valor

    def __hash__(self) -> int:
        return hash(self._valor)

    def __repr__(self) -> str:
        return f"MapId({self._valor!r})"

    def __str__(self) -> str:
        return self._valor


@dataclass(frozen=True)
class MapOptions:
    """Limites de fonte do mapa. Todos positivos, min <= max."""

    font_max_size: int = 70
    font_min_size: int = 15
    font_increment: int = 5

    def __post_init__(self) -> None:
        if min(self.font_max_size, self.font_min_size, self.font_increment) <= 0:
            raise ValueError("Opcoes de fonte devem ser positivas")
        if self.font_min_size > self.font_max_size:
            raise ValueError("font_min_size nao pode exceder font_max_size")

    def to_dict(self) -> dict[str, int]:
        return {
            "font_max_size": self.font_max_size,
            "font_min_size": self.font_min_size,
            "font_increment": self.font_increment,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, object] | None) -> MapOptions:
        if not raw:
            return cls()
        default = cls()
        return cls(
            font_max_size=int(raw.get("font_max_size", default.font_max_size)),  # type: ignore[arg-type]
            font_min_size=int(raw.get("font_min_size", default.font_min_size)),  # type: ignore[arg-type]
            font_increment=int(raw.get("font_increment", default.font_increment)),  # type: ignore[arg-type]
        )


@dataclass(frozen=True)
class Coordinates:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class NodeColors:
    name: str | None = None
    background: str | None = None
    branch: str | None = None


@dataclass(frozen=True)
class NodeFont:
    size: int | None = None
    style: str | None = None
    weight: str | None = None


@dataclass(frozen=True)
class NodeImage:
    src: str | None = None
    size: int | None = None
