"""Client session and authentication endpoints.

Validation failures return 400 and auth rejections return 401; in both
cases `detail` is the inline message for the form. Validation runs before
any backend call.
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from skillfriend.backend.errors import AuthError
from skillfriend.core.forms import (
    SIGN_UP_SUCCESS_MESSAGE,
    SignInForm,
    SignUpForm,
    validate_password,
    validate_sign_in,
    validate_sign_up,
)
from skillfriend.web.dependencies import get_client, get_registry
from skillfriend.web.schemas import (
    PasswordCheckRequest,
    PasswordRequirementsResponse,
    ProfileResponse,
    SessionResponse,
    SignInRequest,
    SignUpRequest,
    SignUpResponse,
)
from skillfriend.web.sessions import ClientSession, ClientSessionRegistry
from skillfriend.web.views import session_response

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/session", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_client_session(
    registry: ClientSessionRegistry = Depends(get_registry),
) -> SessionResponse:
    """Open a client session. Send its client_id as X-Client-Session."""
    client = await registry.create_session()
    return session_response(client)


@router.get("/session", response_model=SessionResponse)
async def get_client_session(client: ClientSession = Depends(get_client)) -> SessionResponse:
    """Current auth state for this client."""
    return session_response(client)


@router.delete("/session", status_code=status.HTTP_204_NO_CONTENT)
async def end_client_session(
    client: ClientSession = Depends(get_client),
    registry: ClientSessionRegistry = Depends(get_registry),
) -> None:
    """Drop the client session and everything held for it."""
    await registry.end_session(client.client_id)


@router.post("/sign-in", response_model=SessionResponse)
async def sign_in(
    request: SignInRequest,
    client: ClientSession = Depends(get_client),
) -> SessionResponse:
    """Sign in with email and password."""
    error = validate_sign_in(SignInForm(email=request.email, password=request.password))
    if error:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error)

    try:
        await client.auth.sign_in(request.email.strip(), request.password)
    except AuthError as e:
        logger.info("sign_in_rejected", client_id=client.client_id, code=e.code)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)

    return session_response(client)


@router.post("/sign-up", response_model=SignUpResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(
    request: SignUpRequest,
    client: ClientSession = Depends(get_client),
) -> SignUpResponse:
    """Create an account. The user signs in separately afterwards."""
    form = SignUpForm(
        email=request.email,
        password=request.password,
        confirm_password=request.confirm_password,
        full_name=request.full_name,
        accept_terms=request.accept_terms,
    )
    error = validate_sign_up(form)
    if error:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error)

    try:
        user = await client.auth.sign_up(
            form.email.strip(), form.password, form.full_name.strip()
        )
    except AuthError as e:
        logger.info("sign_up_rejected", client_id=client.client_id, code=e.code)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)

    return SignUpResponse(
        message=SIGN_UP_SUCCESS_MESSAGE,
        user_id=user.id if user else None,
    )


@router.post("/sign-out", response_model=SessionResponse)
async def sign_out(client: ClientSession = Depends(get_client)) -> SessionResponse:
    """Sign out. Always succeeds."""
    await client.auth.sign_out()
    client.challenges.clear()
    return session_response(client)


@router.post("/refresh", response_model=ProfileResponse | None)
async def refresh_profile(client: ClientSession = Depends(get_client)) -> ProfileResponse | None:
    """Re-fetch the signed-in user's profile (null when anonymous)."""
    profile = await client.auth.refresh_profile()
    if profile is None:
        return None
    return ProfileResponse(**profile.to_dict())


@router.post("/password-check", response_model=PasswordRequirementsResponse)
async def password_check(request: PasswordCheckRequest) -> PasswordRequirementsResponse:
    """Report which password requirements are met (live sign-up hints)."""
    requirements = validate_password(request.password)
    return PasswordRequirementsResponse(**requirements.to_dict(), all_met=requirements.all_met)
