"""FastAPI dependencies: config, registry, client session, services."""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, Request, status

from skillfriend.backend.base import BackendClient
from skillfriend.config.app_config import AppConfig
from skillfriend.core.courses import CourseService
from skillfriend.core.games import GameService
from skillfriend.web.sessions import ClientSession, ClientSessionRegistry


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_registry(request: Request) -> ClientSessionRegistry:
    return request.app.state.registry


def get_shared_backend(request: Request) -> BackendClient:
    """Backend used for anonymous reads (no client session)."""
    return request.app.state.shared_backend


async def get_optional_client(
    x_client_session: str | None = Header(default=None),
    registry: ClientSessionRegistry = Depends(get_registry),
) -> ClientSession | None:
    if not x_client_session:
        return None
    return await registry.get_session(x_client_session)


async def get_client(
    client: ClientSession | None = Depends(get_optional_client),
) -> ClientSession:
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown or missing client session",
        )
    return client


def _backend_for(client: ClientSession | None, shared: BackendClient) -> BackendClient:
    return client.auth.backend if client is not None else shared


def get_course_service(
    client: ClientSession | None = Depends(get_optional_client),
    shared: BackendClient = Depends(get_shared_backend),
    config: AppConfig = Depends(get_config),
) -> CourseService:
    return CourseService(
        _backend_for(client, shared),
        payment_delay_seconds=config.courses.payment_delay_seconds,
    )


def get_game_service(
    client: ClientSession | None = Depends(get_optional_client),
    shared: BackendClient = Depends(get_shared_backend),
    config: AppConfig = Depends(get_config),
) -> GameService:
    return GameService(
        _backend_for(client, shared),
        leaderboard_limit=config.leaderboard_limit,
    )
