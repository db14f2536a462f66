from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from declutter.api.routes.files import router as files_router
from declutter.api.routes.health import router as health_router
from declutter.api.routes.scan import router as scan_router
from declutter.core.config import get_settings
from declutter.core.logging import configure_logging


@asynccontextmanager
async def lifespan(_app: FastAPI):
    settings = get_settings()
    configure_logging(settings.log_level)
    yield


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(scan_router, prefix="/api/v1")
    app.include_router(files_router, prefix="/api/v1")
    return app
