# sweeper/main.py
#
# Sweep entry point: deletes maps whose retention window has elapsed.
#
# Design decisions:
#   - run_sweep is the single entry point. It accepts a SweepConfig and opens
#     its own read-write connection, so it can run while the API is down or
#     from a separate scheduled container.
#   - The sweep itself is MapService.delete_outdated_maps, running in one
#     transaction: either every outdated map (and its nodes) is gone or none.
#   - dry_run lists the outdated map ids and deletes nothing.
#   - There is no in-process scheduler. Run it from cron or any job runner:
#       python -m sweeper.main [--dry-run]
from __future__ import annotations

import argparse
import logging
from functools import partial

import duckdb

from mapstore.application.services.map_service import MapService
from mapstore.infrastructure.duckdb_connection import apply_schema, transaction
from mapstore.infrastructure.repositories.duckdb_map_repo import DuckDBMapRepo
from mapstore.infrastructure.repositories.duckdb_node_repo import DuckDBNodeRepo
from sweeper.config import SweepConfig, load_config
from sweeper.log import SweepLogHandler, log


def run_sweep(config: SweepConfig, *, logger: logging.Logger | None = None) -> int:
    """Run the outdated-map sweep once.

    Args:
        config: Sweep configuration with database path and retention window.
        logger: Logger handed to MapService. Defaults to the service logger.

    Returns:
        Number of maps deleted, or the number of outdated maps found when
        config.dry_run is True.
    """
    log(f"Opening {config.duckdb_path} (retention {config.delete_after_days} days)")
    conn = duckdb.connect(config.duckdb_path)
    try:
        apply_schema(conn)
        service = MapService(
            map_repo=DuckDBMapRepo(conn),
            node_repo=DuckDBNodeRepo(conn),
            settings=config,
            logger=logger,
            transaction=partial(transaction, conn),
        )

        if config.dry_run:
            outdated = service.find_outdated_maps(config.delete_after_days)
            for map_id in outdated:
                log(f"  outdated: {map_id}")
            log(f"Dry run: {len(outdated):,} maps would be deleted")
            return len(outdated)

        deleted = service.delete_outdated_maps(config.delete_after_days)
        log(f"Deleted {deleted:,} outdated maps")
        return deleted
    finally:
        conn.close()


def _configure_logging() -> logging.Logger:
    logger = logging.getLogger("sweeper")
    logger.setLevel(logging.INFO)
    if not logger.handlers:
        logger.addHandler(SweepLogHandler())
    return logger


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Delete maps past their retention window.")
    parser.add_argument("--dry-run", action="store_true", help="list outdated maps, delete nothing")
    args = parser.parse_args()

    cfg = load_config(dry_run=args.dry_run)
    run_sweep(cfg, logger=_configure_logging())
