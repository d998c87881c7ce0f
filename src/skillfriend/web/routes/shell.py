"""Navigation chrome: layout, theme, demo banner, setup notice."""

from fastapi import APIRouter, Depends

from skillfriend.backend.base import BackendClient
from skillfriend.config.app_config import AppConfig
from skillfriend.web.dependencies import get_client, get_config, get_optional_client, get_shared_backend
from skillfriend.web.schemas import (
    DemoBannerResponse,
    LayoutResponse,
    SetupNoticeResponse,
    ThemeRequest,
)
from skillfriend.web.sessions import ClientSession
from skillfriend.web import views

router = APIRouter(prefix="/api/shell", tags=["shell"])


def _is_demo(client: ClientSession | None, shared: BackendClient) -> bool:
    return client.auth.is_demo if client is not None else shared.is_demo


@router.get("/layout", response_model=LayoutResponse)
async def get_layout(
    client: ClientSession | None = Depends(get_optional_client),
    shared: BackendClient = Depends(get_shared_backend),
) -> LayoutResponse:
    """Nav items, user menu, theme and banner state."""
    return views.layout(_is_demo(client, shared), client)


@router.put("/theme", response_model=LayoutResponse)
async def set_theme(
    request: ThemeRequest,
    client: ClientSession = Depends(get_client),
) -> LayoutResponse:
    client.theme = request.theme
    return views.layout(client.auth.is_demo, client)


@router.post("/theme/toggle", response_model=LayoutResponse)
async def toggle_theme(client: ClientSession = Depends(get_client)) -> LayoutResponse:
    """Flip between light and dark."""
    client.toggle_theme()
    return views.layout(client.auth.is_demo, client)


@router.post("/banner/dismiss", response_model=DemoBannerResponse)
async def dismiss_banner(client: ClientSession = Depends(get_client)) -> DemoBannerResponse:
    client.banner_dismissed = True
    return views.demo_banner(client.auth.is_demo, client)


@router.get("/setup", response_model=SetupNoticeResponse)
async def setup(config: AppConfig = Depends(get_config)) -> SetupNoticeResponse:
    """Credential status and the .env template."""
    return views.setup_notice(config)
