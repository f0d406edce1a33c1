# sweeper/log.py
#
# Batch logger with elapsed time, for the sweep process.
#
# Design decisions:
#   - Plain stdout with flush so the scheduler (cron, k8s CronJob) captures
#     each line as it happens.
#   - The service layer logs through stdlib logging; main.py routes those
#     records to this same stdout format.
from __future__ import annotations

import logging
import sys
import time

_start = time.monotonic()


def _prefix() -> str:
    elapsed = time.monotonic() - _start
    minutes, seconds = divmod(int(elapsed), 60)
    return f"[sweep {minutes:02d}:{seconds:02d}]"


def log(message: str) -> None:
    """Write a timestamped log line to stdout."""
    sys.stdout.write(f"{_prefix()} {message}\n")
    sys.stdout.flush()


class SweepLogHandler(logging.Handler):
    """Forwards stdlib logging records to log(), with the level name."""

    def emit(self, record: logging.LogRecord) -> None:
        log(f"{record.levelname} {record.getMessage()}")
