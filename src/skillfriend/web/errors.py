"""Top-level error boundary.

Expected failures are handled at their call sites (results, HTTPException).
Anything else lands here: it is logged, the client's in-memory session is
discarded, and the client is told to reload.
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from skillfriend.backend.errors import SkillFriendError, serialize_error
from skillfriend.core import content
from skillfriend.web.schemas import ErrorBoundaryResponse
from skillfriend.web.sessions import CLIENT_SESSION_HEADER
from skillfriend.web.views import not_found_view

API_PREFIX = "/api/"

logger = structlog.get_logger(__name__)


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown paths outside the API get the not-found page view."""
    path = request.url.path
    if exc.status_code == status.HTTP_404_NOT_FOUND and not path.startswith(API_PREFIX):
        return JSONResponse(status_code=exc.status_code, content=not_found_view(path))
    return await http_exception_handler(request, exc)


async def handle_app_error(request: Request, exc: SkillFriendError) -> JSONResponse:
    """Domain errors that escaped a route: report, keep the session."""
    logger.warning("unhandled_app_error", path=request.url.path, **serialize_error(exc))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.message, "code": exc.code},
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort boundary for faults nobody anticipated."""
    logger.error(
        "unexpected_error",
        path=request.url.path,
        exc_info=exc,
        **serialize_error(exc),
    )

    client_id = request.headers.get(CLIENT_SESSION_HEADER)
    registry = getattr(request.app.state, "registry", None)
    if client_id and registry is not None:
        await registry.end_session(client_id)

    body = ErrorBoundaryResponse(
        title=content.ERROR_TITLE,
        message=str(exc) or content.UNEXPECTED_ERROR_MESSAGE,
        action="reload",
        hints=list(content.ERROR_HINTS),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(SkillFriendError, handle_app_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
