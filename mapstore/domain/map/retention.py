# mapstore/domain/map/retention.py
#
# Pure retention arithmetic for map garbage collection.
#
# Design decisions:
#   - Deadlines are computed on naive wall-clock datetimes, adding whole
#     calendar days. No timezone or DST correction is attempted.
#   - A map's activity is the newest last_modified among its nodes. An empty
#     map falls back to its own last_modified.
#
# Invariants:
#   - compute_deletion_deadline never mutates its input; it returns a new
#     datetime.
#   - The same inputs always produce the same deadline.
from __future__ import annotations

from datetime import datetime, timedelta

from .entities import MindMap
from .errors import MapNotFoundError


def compute_deletion_deadline(last_modified: datetime, retention_days: int) -> datetime:
    """last_modified + retention_days dias de calendario."""
    return last_modified + timedelta(days=retention_days)


def newest_modification(mind_map: MindMap | None, newest_node_modified: datetime | None) -> datetime:
    """Ultima atividade do mapa: no mais recente, ou o proprio mapa se nao houver nos.

    Raises:
        MapNotFoundError: se mind_map for None.
    """
    if mind_map is None:
        raise MapNotFoundError("Map not found")
    if newest_node_modified is None:
        return mind_map.last_modified
    return newest_node_modified
