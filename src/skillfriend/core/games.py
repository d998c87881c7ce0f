"""Games & leaderboard section.

Points are awarded with a read-modify-write on the profile row. There is no
server-side transaction: two completions racing for the same user can lose
an update.
"""

from __future__ import annotations

from datetime import datetime, timezone
from urllib.parse import quote

import structlog

from skillfriend.backend.base import BackendClient
from skillfriend.backend.errors import ChallengeError, DataFetchError, MutationError
from skillfriend.backend.models import GAMES, LEADERBOARD, PROFILES, Game, LeaderboardEntry
from skillfriend.core.challenge import Challenge
from skillfriend.core.results import (
    AUTH_REQUIRED_TITLE,
    FetchResult,
    MutationResult,
    Notification,
)
from skillfriend.core.session import ActionInProgressError, AuthSession

logger = structlog.get_logger(__name__)

DEFAULT_LEADERBOARD_LIMIT = 10
EMPTY_GAMES_MESSAGE = "No games available right now."
EMPTY_LEADERBOARD_MESSAGE = "Be the first on the leaderboard!"
ANONYMOUS_NAME = "Anonymous User"
DEFAULT_GAME_ICON = "🎮"

RANK_MARKERS = {1: "trophy", 2: "medal", 3: "award"}


def rank_marker(rank: int) -> str:
    """Icon name for podium ranks, '#n' otherwise."""
    return RANK_MARKERS.get(rank, f"#{rank}")


def avatar_url(name: str | None) -> str:
    return (
        f"https://ui-avatars.com/api/?name={quote(name or 'User')}"
        "&background=random&color=fff"
    )


def avatar_initial(name: str | None, fallback: str = "U") -> str:
    return (name or fallback)[:1].upper()


class GameService:
    """Reads games and the leaderboard; awards challenge points."""

    def __init__(self, backend: BackendClient, leaderboard_limit: int = DEFAULT_LEADERBOARD_LIMIT):
        self.backend = backend
        self.leaderboard_limit = leaderboard_limit

    async def fetch_games(self) -> FetchResult[list[Game]]:
        try:
            rows = await self.backend.select(GAMES, order_by="created_at", ascending=True)
        except DataFetchError as e:
            logger.error("games_fetch_failed", error=e.message)
            return FetchResult(
                data=[],
                notification=Notification.error("Error", "Failed to load games. Please try again."),
            )
        return FetchResult(data=[Game.from_row(r) for r in rows])

    async def get_game(self, game_id: str) -> Game | None:
        try:
            row = await self.backend.select_one(GAMES, filters={"id": game_id})
        except DataFetchError as e:
            logger.error("game_fetch_failed", game_id=game_id, error=e.message)
            return None
        return Game.from_row(row) if row else None

    async def fetch_leaderboard(self) -> FetchResult[list[LeaderboardEntry]]:
        """Top profiles by points, highest first."""
        try:
            rows = await self.backend.select(
                LEADERBOARD,
                order_by="points",
                ascending=False,
                limit=self.leaderboard_limit,
            )
        except DataFetchError as e:
            logger.error("leaderboard_fetch_failed", error=e.message)
            return FetchResult(
                data=[],
                notification=Notification.error(
                    "Error", "Failed to load leaderboard. Please try again."
                ),
            )
        return FetchResult(data=[LeaderboardEntry.from_row(r) for r in rows])

    async def award_points(self, session: AuthSession, points: int) -> int:
        """Add `points` to the current profile and return the new balance.

        Raises:
            MutationError: Profile missing or the write failed.
        """
        if points < 0:
            raise MutationError(PROFILES, "Points awards must be non-negative")
        user_id = session.user.id
        try:
            row = await self.backend.select_one(PROFILES, filters={"id": user_id})
        except DataFetchError as e:
            raise MutationError(PROFILES, e.message) from e
        if row is None:
            raise MutationError(PROFILES, f"Profile {user_id} not found")

        new_total = int(row.get("points") or 0) + points
        await self.backend.update(
            PROFILES,
            user_id,
            {"points": new_total, "updated_at": datetime.now(timezone.utc).isoformat()},
        )
        logger.info("points_awarded", user_id=user_id, points=points, total=new_total)
        return new_total

    async def complete_challenge(
        self, session: AuthSession, challenge: Challenge, code: str | None = None
    ) -> MutationResult:
        """Submit a challenge, award its reward once, then refresh state.

        The award is not rolled back if the refresh afterwards fails, and the
        challenge stays SUBMITTED if the award itself fails.
        """
        if not session.is_authenticated:
            return MutationResult.failure(AUTH_REQUIRED_TITLE, "Please sign in to play games.")

        game = challenge.game
        try:
            with session.track(f"play:{game.id}"):
                challenge.submit(code)
                total = await self.award_points(session, game.points_reward)
                await session.refresh_profile()
                leaderboard = await self.fetch_leaderboard()
        except ActionInProgressError:
            return MutationResult.failure("Game Error", "This challenge is already being submitted.")
        except ChallengeError as e:
            return MutationResult.failure("Game Error", e.message, state=challenge.state.value)
        except MutationError as e:
            logger.error("challenge_award_failed", game_id=game.id, error=e.message)
            return MutationResult.failure(
                "Game Error",
                "There was an error completing the game. Please try again.",
                state=challenge.state.value,
            )

        return MutationResult.success(
            "🎉 Congratulations!",
            f"You earned {game.points_reward} points!",
            points_awarded=game.points_reward,
            total_points=total,
            leaderboard=[
                {"id": e.id, "full_name": e.full_name, "points": e.points}
                for e in leaderboard.data
            ],
        )
