from __future__ import annotations
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.api import router
from logging_config import configure_logging
from services.refresher import build_default_refresher


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    build_default_refresher()
    try:
        yield
    finally:
        build_default_refresher.cache_clear()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="InfoScreens",
        description="Renders live telemetry onto text panels from operator-authored templates.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(router)
    return app

app = create_app()
