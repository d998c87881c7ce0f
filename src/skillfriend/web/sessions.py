"""Client session registry for the Web API.

Each browser/client gets one ClientSession, identified by the
X-Client-Session header. A ClientSession owns its own backend client and
AuthSession, so one client's sign-in never leaks into another's.
"""

from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

import structlog

from skillfriend.backend.base import BackendClient
from skillfriend.core.challenge import Challenge
from skillfriend.core.session import AuthSession

logger = structlog.get_logger(__name__)

CLIENT_SESSION_HEADER = "X-Client-Session"


@dataclass
class ClientSession:
    """Everything the server remembers about one client."""

    client_id: str
    auth: AuthSession
    theme: str = "system"
    banner_dismissed: bool = False
    created_at: str = ""
    # Open challenge per game id
    challenges: dict[str, Challenge] = field(default_factory=dict)

    def __post_init__(self):
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc).isoformat()

    def toggle_theme(self) -> str:
        self.theme = "light" if self.theme == "dark" else "dark"
        return self.theme

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            "client_id": self.client_id,
            "created_at": self.created_at,
            **self.auth.to_dict(),
        }


class ClientSessionRegistry:
    """Holds the active client sessions.

    Guarded by an asyncio lock; one instance lives on app.state.
    """

    def __init__(self, backend_factory: Callable[[], BackendClient]):
        self._backend_factory = backend_factory
        self._sessions: dict[str, ClientSession] = {}
        self._lock = asyncio.Lock()

    async def create_session(self) -> ClientSession:
        """Create a client session and resolve its initial auth state."""
        client_id = uuid.uuid4().hex
        auth = AuthSession(self._backend_factory())
        session = ClientSession(client_id=client_id, auth=auth)

        async with self._lock:
            self._sessions[client_id] = session

        await auth.initialize()

        logger.info(
            "client_session_created",
            client_id=client_id,
            state=auth.state.value,
            demo=auth.is_demo,
        )
        return session

    async def get_session(self, client_id: str) -> ClientSession | None:
        async with self._lock:
            return self._sessions.get(client_id)

    async def end_session(self, client_id: str) -> bool:
        """Tear down a client session.

        Returns:
            True if the session was ended, False if not found
        """
        async with self._lock:
            session = self._sessions.pop(client_id, None)

        if session is None:
            return False

        session.auth.close()
        session.challenges.clear()
        logger.info("client_session_ended", client_id=client_id)
        return True

    async def get_session_count(self) -> int:
        async with self._lock:
            return len(self._sessions)

    async def close_all(self) -> None:
        async with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for session in sessions:
            session.auth.close()
        logger.info("client_sessions_closed", count=len(sessions))
