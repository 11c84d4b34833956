"""Devfolio API 入口

运行：uvicorn devfolio.main:app
"""

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI

import devfolio.models  # noqa: F401  注册全部表到 Base.metadata
from devfolio import __version__
from devfolio.config import get_settings
from devfolio.core.database import close_database, init_database
from devfolio.core.exception_handlers import setup_exception_handlers
from devfolio.core.logging import setup_logging
from devfolio.core.middlewares import setup_middlewares
from devfolio.core.routers import setup_routers
from devfolio.schemas.datetime_types import to_iso_z
from devfolio.schemas.response import HealthStatus

settings = get_settings()

setup_logging(
    level=settings.log_level,
    json_format=settings.log_json,
    to_file=settings.log_to_file,
    log_dir=settings.log_dir,
)

_started_at = time.monotonic()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    await init_database()
    yield
    await close_database()


def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.app_name,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
    )

    # 中间件先于路由注册；异常处理器最后
    setup_middlewares(application)
    setup_routers(application)
    setup_exception_handlers(application)

    @application.get("/health", response_model=HealthStatus, tags=["health"])
    async def health_check() -> HealthStatus:
        return HealthStatus(
            timestamp=to_iso_z(datetime.now(timezone.utc)),
            uptime=round(time.monotonic() - _started_at, 3),
        )

    return application


app = create_app()
