"""Builders turning section data into response schemas."""

from __future__ import annotations

from skillfriend.backend.factory import validate_backend_config
from skillfriend.backend.errors import ConfigError
from skillfriend.backend.models import Course, Game, LeaderboardEntry
from skillfriend.config.app_config import ENV_TEMPLATE, AppConfig
from skillfriend.core import content
from skillfriend.core.challenge import get_problem
from skillfriend.core.courses import DEFAULT_COURSE_IMAGE, EMPTY_COURSES_MESSAGE
from skillfriend.core.games import (
    ANONYMOUS_NAME,
    DEFAULT_GAME_ICON,
    EMPTY_GAMES_MESSAGE,
    EMPTY_LEADERBOARD_MESSAGE,
    avatar_initial,
    avatar_url,
    rank_marker,
)
from skillfriend.core.results import FetchResult, MutationResult, Notification
from skillfriend.web.schemas import (
    CourseListResponse,
    CourseResponse,
    DemoBannerResponse,
    GameListResponse,
    GameResponse,
    LayoutResponse,
    LeaderboardEntryResponse,
    LeaderboardResponse,
    MutationResponse,
    NavItemResponse,
    NotificationResponse,
    SessionResponse,
    SetupNoticeResponse,
    UserMenuResponse,
)
from skillfriend.web.sessions import ClientSession


def notification_response(notification: Notification | None) -> NotificationResponse | None:
    if notification is None:
        return None
    return NotificationResponse(**notification.to_dict())


def mutation_response(result: MutationResult) -> MutationResponse:
    return MutationResponse(
        ok=result.ok,
        notification=notification_response(result.notification),
        data=result.data,
    )


def session_response(client: ClientSession) -> SessionResponse:
    return SessionResponse(**client.to_dict())


def course_list(
    result: FetchResult[list[Course]], client: ClientSession | None = None
) -> CourseListResponse:
    courses = [
        CourseResponse(
            id=c.id,
            title=c.title,
            description=c.description,
            price=c.price,
            image_url=c.image_url or DEFAULT_COURSE_IMAGE,
            created_at=c.created_at,
            enrolling=client is not None and client.auth.is_pending(f"enroll:{c.id}"),
        )
        for c in result.data
    ]
    return CourseListResponse(
        courses=courses,
        count=len(courses),
        empty_message=None if courses else EMPTY_COURSES_MESSAGE,
        notification=notification_response(result.notification),
    )


def game_list(
    result: FetchResult[list[Game]], client: ClientSession | None = None
) -> GameListResponse:
    games = [
        GameResponse(
            id=g.id,
            title=g.title,
            description=g.description,
            icon=g.icon or DEFAULT_GAME_ICON,
            points_reward=g.points_reward,
            created_at=g.created_at,
            playing=client is not None and client.auth.is_pending(f"play:{g.id}"),
            playable=get_problem(g.title) is not None,
        )
        for g in result.data
    ]
    return GameListResponse(
        games=games,
        count=len(games),
        empty_message=None if games else EMPTY_GAMES_MESSAGE,
        notification=notification_response(result.notification),
    )


def leaderboard(result: FetchResult[list[LeaderboardEntry]]) -> LeaderboardResponse:
    entries = [
        LeaderboardEntryResponse(
            rank=rank,
            rank_marker=rank_marker(rank),
            id=e.id,
            full_name=e.full_name or ANONYMOUS_NAME,
            points=e.points,
            avatar_url=avatar_url(e.full_name),
            avatar_initial=avatar_initial(e.full_name),
        )
        for rank, e in enumerate(result.data, start=1)
    ]
    return LeaderboardResponse(
        entries=entries,
        count=len(entries),
        empty_message=None if entries else EMPTY_LEADERBOARD_MESSAGE,
        notification=notification_response(result.notification),
    )


def demo_banner(is_demo: bool, client: ClientSession | None) -> DemoBannerResponse:
    dismissed = client is not None and client.banner_dismissed
    return DemoBannerResponse(visible=is_demo and not dismissed, text=content.DEMO_BANNER_TEXT)


def layout(is_demo: bool, client: ClientSession | None) -> LayoutResponse:
    user_menu = None
    if client is not None and client.auth.is_authenticated and client.auth.profile is not None:
        profile = client.auth.profile
        user_menu = UserMenuResponse(
            full_name=profile.display_name,
            email=profile.email,
            points=profile.points,
            avatar_url=avatar_url(profile.full_name),
            avatar_initial=avatar_initial(profile.full_name or profile.email),
        )
    return LayoutResponse(
        app_name=content.APP_NAME,
        nav=[NavItemResponse(label=n.label, section_id=n.section_id) for n in content.NAV_ITEMS],
        theme=client.theme if client is not None else "system",
        user_menu=user_menu,
        demo_banner=demo_banner(is_demo, client),
    )


def setup_notice(config: AppConfig) -> SetupNoticeResponse:
    problem = None
    try:
        validate_backend_config(config.backend.url, config.backend.anon_key)
    except ConfigError as e:
        problem = e.message
    return SetupNoticeResponse(
        configured=problem is None,
        title=content.SETUP_TITLE,
        description=content.SETUP_DESCRIPTION,
        steps=list(content.SETUP_STEPS),
        env_template=ENV_TEMPLATE,
        problem=problem,
    )


def not_found_view(path: str) -> dict:
    return {
        "view": "not_found",
        "path": path,
        "message": content.NOT_FOUND_MESSAGE,
        "home": "/",
    }
