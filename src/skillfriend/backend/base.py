"""Backend client interface.

Both the live Supabase adapter and the demo mock implement this capability
set: row queries, inserts, updates-by-id, and the auth boundary.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from skillfriend.backend.models import AuthSessionInfo, AuthUser

# Auth-state notification event names (Supabase naming)
SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"
TOKEN_REFRESHED = "TOKEN_REFRESHED"
USER_UPDATED = "USER_UPDATED"

AuthStateCallback = Callable[[str, AuthSessionInfo | None], None]


@dataclass
class Subscription:
    """Handle returned by on_auth_state_change."""

    _unsubscribe: Callable[[], None] = field(default=lambda: None)
    active: bool = True

    def unsubscribe(self) -> None:
        if not self.active:
            return
        self.active = False
        self._unsubscribe()


class BackendClient(ABC):
    """Row store plus auth boundary."""

    #: True for the in-memory demo backend
    is_demo: bool = False

    # ------------------------------------------------------------------
    # Rows
    # ------------------------------------------------------------------

    @abstractmethod
    async def select(
        self,
        table: str,
        *,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        ascending: bool = True,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Return rows of `table` matching equality `filters`.

        Raises:
            DataFetchError: If the read fails.
        """

    async def select_one(
        self, table: str, *, filters: Mapping[str, Any]
    ) -> dict[str, Any] | None:
        """Return the first matching row, or None."""
        rows = await self.select(table, filters=filters, limit=1)
        return rows[0] if rows else None

    @abstractmethod
    async def insert(self, table: str, row: Mapping[str, Any]) -> dict[str, Any]:
        """Insert a row and return it.

        Raises:
            MutationError: If the write fails.
        """

    @abstractmethod
    async def update(
        self, table: str, row_id: str, values: Mapping[str, Any]
    ) -> dict[str, Any]:
        """Update the row with `id == row_id` and return it.

        Raises:
            MutationError: If the write fails or the row does not exist.
        """

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    @abstractmethod
    async def sign_in_with_password(self, email: str, password: str) -> AuthSessionInfo:
        """Raises AuthError on rejected credentials."""

    @abstractmethod
    async def sign_up(self, email: str, password: str, full_name: str) -> AuthUser | None:
        """Create a pending account. Raises AuthError on failure."""

    @abstractmethod
    async def sign_out(self) -> None:
        """End the backend session."""

    @abstractmethod
    async def get_session(self) -> AuthSessionInfo | None:
        """Return the current backend session, if any."""

    @abstractmethod
    def on_auth_state_change(self, callback: AuthStateCallback) -> Subscription:
        """Register for auth-state notifications."""
