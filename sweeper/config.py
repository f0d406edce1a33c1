# sweeper/config.py
#
# Sweep configuration loaded from environment variables.
#
# Design decisions:
#   - Frozen dataclass, not the API Settings: the sweep is a standalone
#     offline process and only needs the database path and retention window.
#   - DUCKDB_PATH has no in-memory default here. Sweeping a fresh in-memory
#     database would silently do nothing, so load_config refuses it.
from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class SweepConfig:
    """Immutable sweep configuration.

    Invariants:
      - duckdb_path points to a database file, never ":memory:".
      - delete_after_days >= 0.
    """

    duckdb_path: str
    delete_after_days: int = 30
    dry_run: bool = False


def load_config(*, dry_run: bool = False) -> SweepConfig:
    """Build SweepConfig from environment variables.

    Raises:
        ValueError: if DUCKDB_PATH is unset or in-memory, or if
            DELETE_AFTER_DAYS is negative.
    """
    path = os.environ.get("DUCKDB_PATH", "")
    if not path or path == ":memory:":
        raise ValueError(
            "DUCKDB_PATH environment variable must point to the map database file."
        )

    days = int(os.environ.get("DELETE_AFTER_DAYS", "30"))
    if days < 0:
        raise ValueError(f"DELETE_AFTER_DAYS must be >= 0, got {days}")

    return SweepConfig(duckdb_path=path, delete_after_days=days, dry_run=dry_run)
