"""Page views: home, contact, and not-found for everything else.

The same views are served at the site root (`/`, `/contact`) and under
`/api/pages`. Unknown paths outside `/api` get the not-found view from the
app-level 404 handler in web/errors.py.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from skillfriend.backend.base import BackendClient
from skillfriend.config.app_config import AppConfig
from skillfriend.core import content
from skillfriend.core.courses import CourseService
from skillfriend.core.games import GameService
from skillfriend.web.dependencies import (
    get_config,
    get_course_service,
    get_game_service,
    get_optional_client,
    get_shared_backend,
)
from skillfriend.web.schemas import HomeViewResponse
from skillfriend.web.sessions import ClientSession
from skillfriend.web import views

router = APIRouter(prefix="/api/pages", tags=["pages"])
site_router = APIRouter(tags=["pages"])


@site_router.get("/", response_model=HomeViewResponse)
@router.get("", response_model=HomeViewResponse)
@router.get("/", response_model=HomeViewResponse, include_in_schema=False)
async def home(
    client: ClientSession | None = Depends(get_optional_client),
    shared: BackendClient = Depends(get_shared_backend),
    config: AppConfig = Depends(get_config),
    courses: CourseService = Depends(get_course_service),
    games: GameService = Depends(get_game_service),
) -> HomeViewResponse:
    """Home view.

    - loading: the client's auth state is not resolved yet
    - setup: no backend configured; setup notice plus a demo preview
    - auth: backend configured, nobody signed in
    - app: signed in; layout plus all sections
    """
    is_demo = client.auth.is_demo if client is not None else shared.is_demo

    if client is not None and client.auth.loading:
        return HomeViewResponse(view="loading")

    if is_demo:
        return HomeViewResponse(
            view="setup",
            layout=views.layout(is_demo, client),
            setup=views.setup_notice(config),
            hero=content.HERO,
            courses=views.course_list(await courses.fetch_courses(), client),
            games=views.game_list(await games.fetch_games(), client),
            leaderboard=views.leaderboard(await games.fetch_leaderboard()),
        )

    if client is None or not client.auth.is_authenticated:
        return HomeViewResponse(view="auth", layout=views.layout(is_demo, client))

    return HomeViewResponse(
        view="app",
        layout=views.layout(is_demo, client),
        hero=content.HERO,
        courses=views.course_list(await courses.fetch_courses(), client),
        games=views.game_list(await games.fetch_games(), client),
        leaderboard=views.leaderboard(await games.fetch_leaderboard()),
    )


@site_router.get("/contact")
@router.get("/contact")
async def contact() -> dict:
    """Founders and inquiry topics."""
    return {"view": "contact", **content.contact_page()}


@router.get("/{path:path}")
async def not_found(path: str) -> JSONResponse:
    """Catch-all for unknown pages."""
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=views.not_found_view(f"/{path}"),
    )
