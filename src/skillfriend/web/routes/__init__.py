"""Route handlers for the Web API."""

from skillfriend.web.routes.health import router as health_router
from skillfriend.web.routes.auth import router as auth_router
from skillfriend.web.routes.courses import router as courses_router
from skillfriend.web.routes.games import router as games_router
from skillfriend.web.routes.challenges import router as challenges_router
from skillfriend.web.routes.pages import router as pages_router
from skillfriend.web.routes.pages import site_router
from skillfriend.web.routes.shell import router as shell_router

__all__ = [
    "health_router",
    "auth_router",
    "courses_router",
    "games_router",
    "challenges_router",
    "pages_router",
    "site_router",
    "shell_router",
]
