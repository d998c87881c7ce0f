"""Challenge endpoints.

A challenge is opened for a game, started (timer begins), edited, and
submitted. Submitting awards the game's points once.
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from skillfriend.backend.errors import ChallengeError
from skillfriend.config.app_config import AppConfig
from skillfriend.core.challenge import Challenge
from skillfriend.core.games import GameService
from skillfriend.web.dependencies import get_client, get_config, get_game_service
from skillfriend.web.schemas import (
    ChallengeCodeRequest,
    ChallengeResponse,
    ChallengeSubmitRequest,
    MutationResponse,
)
from skillfriend.web.sessions import ClientSession
from skillfriend.web.views import mutation_response

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/challenges", tags=["challenges"])


def _get_open_challenge(client: ClientSession, game_id: str) -> Challenge:
    challenge = client.challenges.get(game_id)
    if challenge is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No open challenge for game '{game_id}'",
        )
    return challenge


def _require_signed_in(client: ClientSession) -> None:
    if not client.auth.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Please sign in to play games.",
        )


@router.post("/{game_id}", response_model=ChallengeResponse, status_code=status.HTTP_201_CREATED)
async def open_challenge(
    game_id: str,
    client: ClientSession = Depends(get_client),
    service: GameService = Depends(get_game_service),
    config: AppConfig = Depends(get_config),
) -> ChallengeResponse:
    """Open a fresh challenge for a game (replaces any open one)."""
    _require_signed_in(client)

    game = await service.get_game(game_id)
    if game is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Game '{game_id}' not found",
        )

    try:
        challenge = Challenge(game, duration_seconds=config.challenge.duration_seconds)
    except ChallengeError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)

    client.challenges[game_id] = challenge
    logger.info("challenge_opened", client_id=client.client_id, game_id=game_id)
    return ChallengeResponse(**challenge.to_dict())


@router.get("/{game_id}", response_model=ChallengeResponse)
async def get_challenge(
    game_id: str,
    client: ClientSession = Depends(get_client),
) -> ChallengeResponse:
    """Current state of the open challenge (timer included)."""
    return ChallengeResponse(**_get_open_challenge(client, game_id).to_dict())


@router.post("/{game_id}/start", response_model=ChallengeResponse)
async def start_challenge(
    game_id: str,
    client: ClientSession = Depends(get_client),
) -> ChallengeResponse:
    """Start the countdown and load the starter code."""
    challenge = _get_open_challenge(client, game_id)
    try:
        challenge.start()
    except ChallengeError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    return ChallengeResponse(**challenge.to_dict())


@router.put("/{game_id}/code", response_model=ChallengeResponse)
async def edit_code(
    game_id: str,
    request: ChallengeCodeRequest,
    client: ClientSession = Depends(get_client),
) -> ChallengeResponse:
    """Replace the solution text."""
    challenge = _get_open_challenge(client, game_id)
    try:
        challenge.edit(request.code)
    except ChallengeError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    return ChallengeResponse(**challenge.to_dict())


@router.post("/{game_id}/submit", response_model=MutationResponse)
async def submit_challenge(
    game_id: str,
    request: ChallengeSubmitRequest,
    client: ClientSession = Depends(get_client),
    service: GameService = Depends(get_game_service),
) -> MutationResponse:
    """Submit the solution and award points."""
    challenge = _get_open_challenge(client, game_id)
    result = await service.complete_challenge(client.auth, challenge, request.code)
    if result.ok:
        client.challenges.pop(game_id, None)
    return mutation_response(result)


@router.delete("/{game_id}", status_code=status.HTTP_204_NO_CONTENT)
async def close_challenge(
    game_id: str,
    client: ClientSession = Depends(get_client),
) -> None:
    """Close the challenge without submitting."""
    _get_open_challenge(client, game_id)
    del client.challenges[game_id]
