"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from skillfriend.backend.base import BackendClient
from skillfriend.web.dependencies import get_registry, get_shared_backend
from skillfriend.web.schemas import HealthResponse
from skillfriend.web.sessions import ClientSessionRegistry

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    backend: BackendClient = Depends(get_shared_backend),
    registry: ClientSessionRegistry = Depends(get_registry),
) -> HealthResponse:
    """Check API health status, backend mode and open client sessions."""
    return HealthResponse(
        status="ok",
        version="0.1.0",
        mode="demo" if backend.is_demo else "live",
        active_sessions=await registry.get_session_count(),
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
