"""FastAPI application entry point."""

from __future__ import annotations

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from boxtracker.config import get_settings
from boxtracker.db import get_engine
from boxtracker.db.schema import run_migrations
from boxtracker.infra.logging_config import LoggingConfig, get_logger
from boxtracker.routers import boxes_router, system
from boxtracker.routers.errors import register_exception_handlers

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    applied = run_migrations(get_engine())
    logger.info("Schema ready (%d step(s) applied)", len(applied))
    yield


def create_app(testing: bool = False) -> FastAPI:
    """Build the app. Testing mode skips startup migrations."""
    settings = get_settings()
    LoggingConfig(settings.log_level)

    run_startup = settings.run_migrations_on_startup and not testing
    app = FastAPI(
        title="Moving Box Tracker",
        version=settings.app_version,
        description="Track household moving boxes, their rooms and contents",
        lifespan=lifespan if run_startup else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(system.router)
    app.include_router(boxes_router.router, prefix="/api")
    return app


def main() -> None:
    settings = get_settings()
    uvicorn.run(create_app(), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
