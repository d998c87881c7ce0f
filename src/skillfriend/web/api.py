"""FastAPI application factory.

Main entry point for the Skill Friend Web API.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Callable

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from skillfriend.backend.base import BackendClient
from skillfriend.backend.factory import create_backend
from skillfriend.config.app_config import AppConfig, load_app_config
from skillfriend.web.errors import register_error_handlers
from skillfriend.web.routes import (
    auth_router,
    challenges_router,
    courses_router,
    games_router,
    health_router,
    pages_router,
    shell_router,
    site_router,
)
from skillfriend.web.sessions import ClientSessionRegistry

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup/shutdown events."""
    logger.info(
        "api_startup",
        mode="demo" if app.state.shared_backend.is_demo else "live",
    )
    yield
    await app.state.registry.close_all()


def create_app(
    config: AppConfig | None = None,
    backend_factory: Callable[[], BackendClient] | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Application config (loaded from file/env if not provided)
        backend_factory: Builds one backend client per client session
            (defaults to create_backend(config))

    Returns:
        Configured FastAPI app instance
    """
    if config is None:
        config = load_app_config()
    if backend_factory is None:
        backend_factory = lambda: create_backend(config)  # noqa: E731

    app = FastAPI(
        title="Skill Friend API",
        description="Courses, coding challenges and leaderboard for Skill Friend",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.shared_backend = backend_factory()
    app.state.registry = ClientSessionRegistry(backend_factory)

    # CORS middleware for web clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(courses_router)
    app.include_router(games_router)
    app.include_router(challenges_router)
    app.include_router(shell_router)
    app.include_router(pages_router)
    app.include_router(site_router)

    return app
