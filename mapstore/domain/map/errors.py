# mapstore/domain/map/errors.py
from __future__ import annotations


class MapStoreError(Exception):
    """Base de todos os erros de dominio do mapstore."""


class MalformedUUIDError(MapStoreError, ValueError):
    """Identificador de mapa nao e um UUID valido. Levantado antes de qualquer IO."""


class InvalidTreeReferenceError(MapStoreError, ValueError):
    """No viola a invariante root / detached / pai existente."""


class MissingArgumentError(MapStoreError, ValueError):
    """map_id ou no ausente onde sao obrigatorios."""


class MapNotFoundError(MapStoreError, LookupError):
    """Mapa exigido pela operacao nao existe."""
