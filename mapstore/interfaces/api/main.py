# mapstore/interfaces/api/main.py
from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from mapstore.infrastructure.config import get_settings
from mapstore.infrastructure.duckdb_connection import get_connection
from mapstore.interfaces.api.routes.map_routes import router as map_router
from mapstore.interfaces.api.routes.node_routes import router as node_router

LOGGER = logging.getLogger(__name__)

_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings = get_settings()
    get_connection()  # abre o DuckDB e aplica schema.sql antes do primeiro request
    LOGGER.info(
        "Mapstore API up (duckdb=%s, delete_after_days=%d)",
        settings.duckdb_path,
        settings.delete_after_days,
    )
    yield


app = FastAPI(
    title="Mapstore API",
    debug=get_settings().debug,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url=None,
)


@app.middleware("http")
async def security_headers(request: Request, call_next: object) -> Response:
    response = await call_next(request)  # type: ignore[misc]
    response.headers.update(_SECURITY_HEADERS)
    return response  # type: ignore[no-any-return]


# frontend local edita mapas: precisa de PUT e DELETE alem de GET/POST
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_settings().cors_origins),
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type"],
)

app.include_router(map_router, prefix="/api")
app.include_router(node_router, prefix="/api")
