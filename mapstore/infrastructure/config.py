# mapstore/infrastructure/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    duckdb_path: str
    delete_after_days: int
    debug: bool
    cors_origins: tuple[str, ...]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings(
        duckdb_path=os.environ.get("DUCKDB_PATH", ":memory:"),
        delete_after_days=int(os.environ.get("DELETE_AFTER_DAYS", "30")),
        debug=os.environ.get("API_DEBUG", "false").lower() == "true",
        cors_origins=tuple(
            origin.strip()
            for origin in os.environ.get("CORS_ORIGINS", "http://localhost:4200").split(",")
            if origin.strip()
        ),
    )
