"""Games and leaderboard endpoints."""

from fastapi import APIRouter, Depends

from skillfriend.core.games import GameService
from skillfriend.web.dependencies import get_game_service, get_optional_client
from skillfriend.web.schemas import GameListResponse, LeaderboardResponse
from skillfriend.web.sessions import ClientSession
from skillfriend.web.views import game_list, leaderboard

router = APIRouter(prefix="/api", tags=["games"])


@router.get("/games", response_model=GameListResponse)
async def list_games(
    service: GameService = Depends(get_game_service),
    client: ClientSession | None = Depends(get_optional_client),
) -> GameListResponse:
    """List all games, oldest first."""
    return game_list(await service.fetch_games(), client)


@router.get("/leaderboard", response_model=LeaderboardResponse)
async def get_leaderboard(service: GameService = Depends(get_game_service)) -> LeaderboardResponse:
    """Top learners by points."""
    return leaderboard(await service.fetch_leaderboard())
