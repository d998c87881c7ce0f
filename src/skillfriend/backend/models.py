"""Row models for the backend collections.

Rows come back from the backend as plain dicts; these dataclasses give them
names and defaults. Unknown keys are ignored.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Mapping

# Collection names on the backend
PROFILES = "profiles"
COURSES = "courses"
GAMES = "games"
ENROLLMENTS = "enrollments"
LEADERBOARD = "leaderboard"


@dataclass
class Profile:
    """A user's persisted identity and points balance."""

    id: str
    email: str
    full_name: str | None = None
    points: int = 0
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Profile:
        return cls(
            id=str(row["id"]),
            email=row.get("email") or "",
            full_name=row.get("full_name"),
            points=int(row.get("points") or 0),
            created_at=row.get("created_at") or "",
            updated_at=row.get("updated_at") or "",
        )

    @property
    def display_name(self) -> str:
        return self.full_name or "User"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class Course:
    """A purchasable course listing."""

    id: str
    title: str
    description: str
    price: float
    image_url: str | None = None
    created_at: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Course:
        return cls(
            id=str(row["id"]),
            title=row.get("title", ""),
            description=row.get("description", ""),
            price=float(row.get("price") or 0),
            image_url=row.get("image_url"),
            created_at=row.get("created_at") or "",
        )


@dataclass
class Game:
    """A coding challenge with a fixed point reward."""

    id: str
    title: str
    description: str
    points_reward: int
    icon: str | None = None
    created_at: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Game:
        return cls(
            id=str(row["id"]),
            title=row.get("title", ""),
            description=row.get("description", ""),
            points_reward=int(row.get("points_reward") or 0),
            icon=row.get("icon"),
            created_at=row.get("created_at") or "",
        )


@dataclass
class LeaderboardEntry:
    """Ranked projection of a profile."""

    id: str
    full_name: str | None
    points: int

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> LeaderboardEntry:
        return cls(
            id=str(row["id"]),
            full_name=row.get("full_name"),
            points=int(row.get("points") or 0),
        )


@dataclass
class Enrollment:
    """A (user, course) enrollment record."""

    user_id: str
    course_id: str

    def to_row(self) -> dict[str, str]:
        return {"user_id": self.user_id, "course_id": self.course_id}


@dataclass
class AuthUser:
    """The authenticated backend user (not the profile)."""

    id: str
    email: str | None = None


@dataclass
class AuthSessionInfo:
    """A backend auth session: the user plus its access token."""

    user: AuthUser
    access_token: str | None = None
