"""Per-client authentication session.

An AuthSession is constructed for one client at startup, holds the current
user and cached profile, and is torn down on sign-out. State machine:

    LOADING -> AUTHENTICATED | ANONYMOUS
    AUTHENTICATED -> ANONYMOUS   (sign_out, or SIGNED_OUT from the backend)
"""

from __future__ import annotations

from contextlib import contextmanager
from enum import Enum
from typing import Any, Iterator

import structlog

from skillfriend.backend.base import SIGNED_OUT, BackendClient, Subscription
from skillfriend.backend.errors import DataFetchError
from skillfriend.backend.models import PROFILES, AuthSessionInfo, AuthUser, Profile

logger = structlog.get_logger(__name__)


class SessionState(str, Enum):
    """Auth lifecycle states."""

    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


class ActionInProgressError(Exception):
    """The same action is already outstanding for this session."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Action '{key}' is already in progress")


class AuthSession:
    """Current user, profile and demo flag for one client."""

    def __init__(self, backend: BackendClient):
        self.backend = backend
        self.state = SessionState.LOADING
        self.user: AuthUser | None = None
        self.profile: Profile | None = None
        self._subscription: Subscription | None = None
        self._pending: set[str] = set()

    @property
    def is_demo(self) -> bool:
        return self.backend.is_demo

    @property
    def loading(self) -> bool:
        return self.state is SessionState.LOADING

    @property
    def is_authenticated(self) -> bool:
        return self.state is SessionState.AUTHENTICATED and self.user is not None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        """Restore any existing backend session and subscribe to auth events."""
        if self._subscription is None:
            self._subscription = self.backend.on_auth_state_change(self._on_auth_event)

        existing = await self.backend.get_session()
        if existing is None:
            self._set_anonymous()
        else:
            self.user = existing.user
            self.state = SessionState.AUTHENTICATED
            self.profile = await self._load_profile(existing.user.id)

        logger.info(
            "session_initialized",
            state=self.state.value,
            demo=self.is_demo,
        )

    def close(self) -> None:
        """Stop listening for auth events."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    # ------------------------------------------------------------------
    # Auth operations
    # ------------------------------------------------------------------

    async def sign_in(self, email: str, password: str) -> Profile | None:
        """Sign in and cache the profile.

        Raises:
            AuthError: Rejected credentials or network failure.
            DemoModeError: No backend is configured.
        """
        auth_session = await self.backend.sign_in_with_password(email, password)
        self.user = auth_session.user
        self.state = SessionState.AUTHENTICATED
        self.profile = await self._load_profile(auth_session.user.id)
        logger.info("signed_in", user_id=self.user.id, has_profile=self.profile is not None)
        return self.profile

    async def sign_up(self, email: str, password: str, full_name: str) -> AuthUser | None:
        """Create a pending account; the user still has to sign in.

        Raises:
            AuthError: Backend rejected the sign-up.
            DemoModeError: Always, on the demo backend.
        """
        user = await self.backend.sign_up(email, password, full_name)
        logger.info("signed_up", email=email)
        return user

    async def sign_out(self) -> None:
        """Clear user and profile. Never raises."""
        try:
            await self.backend.sign_out()
        except Exception as e:
            logger.warning("backend_sign_out_failed", error=str(e))
        previous = self.user.id if self.user else None
        self._set_anonymous()
        logger.info("signed_out", user_id=previous)

    async def refresh_profile(self) -> Profile | None:
        """Re-fetch the profile for the current user; no-op when anonymous."""
        if not self.is_authenticated:
            return None
        self.profile = await self._load_profile(self.user.id)
        return self.profile

    # ------------------------------------------------------------------
    # In-flight actions
    # ------------------------------------------------------------------

    @contextmanager
    def track(self, key: str) -> Iterator[None]:
        """Mark an action as outstanding until the block exits."""
        if key in self._pending:
            raise ActionInProgressError(key)
        self._pending.add(key)
        try:
            yield
        finally:
            self._pending.discard(key)

    def is_pending(self, key: str) -> bool:
        return key in self._pending

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _set_anonymous(self) -> None:
        self.user = None
        self.profile = None
        self.state = SessionState.ANONYMOUS

    async def _load_profile(self, user_id: str) -> Profile | None:
        try:
            row = await self.backend.select_one(PROFILES, filters={"id": user_id})
        except DataFetchError as e:
            logger.error("profile_fetch_failed", user_id=user_id, error=e.message)
            return None
        if row is None:
            logger.warning("profile_missing", user_id=user_id)
            return None
        return Profile.from_row(row)

    def _on_auth_event(self, event: str, session: AuthSessionInfo | None) -> None:
        logger.debug("auth_state_changed", auth_event=event)
        if event == SIGNED_OUT or session is None:
            if self.state is SessionState.AUTHENTICATED:
                logger.info("session_expired", user_id=self.user.id if self.user else None)
            self._set_anonymous()
            return
        if self.user is None or self.user.id != session.user.id:
            # Profile is loaded on the next refresh_profile()
            self.profile = None
        self.user = session.user
        self.state = SessionState.AUTHENTICATED

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            "state": self.state.value,
            "loading": self.loading,
            "is_demo": self.is_demo,
            "user": {"id": self.user.id, "email": self.user.email} if self.user else None,
            "profile": self.profile.to_dict() if self.profile else None,
        }

