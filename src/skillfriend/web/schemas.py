"""Pydantic schemas for the Web API.

Serialization models for sessions, auth forms, sections and shell views.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, Field


# =============================================================================
# COMMON
# =============================================================================


class NotificationResponse(BaseModel):
    """A transient toast."""

    title: str
    description: str
    variant: str = "default"


class MutationResponse(BaseModel):
    """Outcome of an enroll / award action."""

    ok: bool
    notification: NotificationResponse
    data: dict[str, Any] = Field(default_factory=dict)


# =============================================================================
# SESSION / AUTH SCHEMAS
# =============================================================================


class UserResponse(BaseModel):
    id: str
    email: str | None = None


class ProfileResponse(BaseModel):
    """Response for a profile."""

    id: str
    email: str
    full_name: str | None = None
    points: int = 0
    created_at: str = ""
    updated_at: str = ""

    model_config = {"from_attributes": True}


class SessionResponse(BaseModel):
    """Current client session state."""

    client_id: str
    state: str  # loading | authenticated | anonymous
    loading: bool
    is_demo: bool
    user: UserResponse | None = None
    profile: ProfileResponse | None = None
    created_at: str


class SignInRequest(BaseModel):
    email: str = Field(..., max_length=200)
    password: str = Field(..., max_length=200)


class SignUpRequest(BaseModel):
    email: str = Field(..., max_length=200)
    password: str = Field(..., max_length=200)
    confirm_password: str = Field(..., max_length=200)
    full_name: str = Field(default="", max_length=100)
    accept_terms: bool = False


class SignUpResponse(BaseModel):
    message: str
    user_id: str | None = None


class PasswordCheckRequest(BaseModel):
    password: str = Field(..., max_length=200)


class PasswordRequirementsResponse(BaseModel):
    length: bool
    uppercase: bool
    lowercase: bool
    number: bool
    special: bool
    all_met: bool


# =============================================================================
# SECTION SCHEMAS
# =============================================================================


class CourseResponse(BaseModel):
    id: str
    title: str
    description: str
    price: float
    image_url: str
    created_at: str = ""
    enrolling: bool = False


class CourseListResponse(BaseModel):
    courses: list[CourseResponse]
    count: int
    empty_message: str | None = None
    notification: NotificationResponse | None = None


class GameResponse(BaseModel):
    id: str
    title: str
    description: str
    icon: str
    points_reward: int
    created_at: str = ""
    playing: bool = False
    playable: bool = True


class GameListResponse(BaseModel):
    games: list[GameResponse]
    count: int
    empty_message: str | None = None
    notification: NotificationResponse | None = None


class LeaderboardEntryResponse(BaseModel):
    rank: int
    rank_marker: str
    id: str
    full_name: str
    points: int
    avatar_url: str
    avatar_initial: str


class LeaderboardResponse(BaseModel):
    entries: list[LeaderboardEntryResponse]
    count: int
    empty_message: str | None = None
    notification: NotificationResponse | None = None


# =============================================================================
# CHALLENGE SCHEMAS
# =============================================================================


class ChallengeResponse(BaseModel):
    game_id: str
    title: str
    icon: str | None = None
    points_reward: int
    state: str  # not_started | in_progress | submitted | timed_out
    time_left: int
    time_left_display: str
    problem: str | None = None
    preview: str
    code: str = ""
    can_submit: bool = False


class ChallengeCodeRequest(BaseModel):
    code: str = Field(..., max_length=20000)


class ChallengeSubmitRequest(BaseModel):
    code: str | None = Field(default=None, max_length=20000)


# =============================================================================
# SHELL SCHEMAS
# =============================================================================


Theme = Literal["light", "dark", "system"]


class ThemeRequest(BaseModel):
    theme: Theme


class NavItemResponse(BaseModel):
    label: str
    section_id: str


class UserMenuResponse(BaseModel):
    full_name: str
    email: str
    points: int
    avatar_url: str
    avatar_initial: str


class DemoBannerResponse(BaseModel):
    visible: bool
    text: str


class LayoutResponse(BaseModel):
    app_name: str
    nav: list[NavItemResponse]
    theme: str
    user_menu: UserMenuResponse | None = None
    demo_banner: DemoBannerResponse


class SetupNoticeResponse(BaseModel):
    configured: bool
    title: str
    description: str
    steps: list[str]
    env_template: str
    problem: str | None = None


class HomeViewResponse(BaseModel):
    """Home page view model.

    view: loading | setup | auth | app
    """

    view: str
    layout: LayoutResponse | None = None
    setup: SetupNoticeResponse | None = None
    hero: dict[str, Any] | None = None
    courses: CourseListResponse | None = None
    games: GameListResponse | None = None
    leaderboard: LeaderboardResponse | None = None


class ErrorBoundaryResponse(BaseModel):
    title: str
    message: str
    action: str = "reload"
    hints: list[str] = Field(default_factory=list)


# =============================================================================
# HEALTH SCHEMAS
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = "0.1.0"
    mode: str = "demo"  # demo | live
    active_sessions: int = 0
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
