"""
FastAPI app over the item store.
Run with `uvicorn grocery.api:app`.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from . import __version__
from .logs import ensure_log_schema
from .services.item_svc import ensure_item_schema

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    ensure_log_schema()
    ensure_item_schema()
    logger.info("schemas ready")
    yield


app = FastAPI(title="grocery-store-api", version=__version__, lifespan=lifespan)


from .routes import base as base_routes
from .routes import items as items_routes
from .routes import logs as logs_routes

app.include_router(base_routes.router)
app.include_router(items_routes.router)
app.include_router(logs_routes.router)
