"""Supabase-backed implementation of the backend client.

The Supabase Python SDK is synchronous; every call is pushed to a worker
thread so request handlers never block the event loop.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Mapping, TypeVar

import structlog
from supabase import Client, create_client

from skillfriend.backend.base import AuthStateCallback, BackendClient, Subscription
from skillfriend.backend.errors import AuthError, DataFetchError, MutationError
from skillfriend.backend.models import AuthSessionInfo, AuthUser

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def _running_loop() -> asyncio.AbstractEventLoop | None:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


def _to_user(user: Any) -> AuthUser | None:
    if user is None:
        return None
    return AuthUser(id=str(user.id), email=getattr(user, "email", None))


def _to_session(session: Any) -> AuthSessionInfo | None:
    if session is None or getattr(session, "user", None) is None:
        return None
    return AuthSessionInfo(
        user=_to_user(session.user),
        access_token=getattr(session, "access_token", None),
    )


class LiveBackend(BackendClient):
    """Delegates every call to a Supabase client."""

    is_demo = False

    def __init__(self, url: str, key: str, client: Client | None = None) -> None:
        self.url = url
        self._client = client if client is not None else create_client(url, key)
        logger.info("live_backend_initialized", url=url)

    async def _run(self, func: Callable[[], T]) -> T:
        return await asyncio.to_thread(func)

    # ------------------------------------------------------------------
    # Rows
    # ------------------------------------------------------------------

    async def select(
        self,
        table: str,
        *,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        ascending: bool = True,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        def query() -> list[dict[str, Any]]:
            builder = self._client.table(table).select("*")
            for column, value in (filters or {}).items():
                builder = builder.eq(column, value)
            if order_by is not None:
                builder = builder.order(order_by, desc=not ascending)
            if limit is not None:
                builder = builder.limit(limit)
            return builder.execute().data or []

        try:
            return await self._run(query)
        except Exception as e:
            logger.error("select_failed", table=table, error=str(e))
            raise DataFetchError(table, f"Error fetching {table}: {e}") from e

    async def insert(self, table: str, row: Mapping[str, Any]) -> dict[str, Any]:
        def query() -> list[dict[str, Any]]:
            return self._client.table(table).insert(dict(row)).execute().data or []

        try:
            data = await self._run(query)
        except Exception as e:
            logger.error("insert_failed", table=table, error=str(e))
            raise MutationError(table, f"Error inserting into {table}: {e}") from e
        return data[0] if data else dict(row)

    async def update(
        self, table: str, row_id: str, values: Mapping[str, Any]
    ) -> dict[str, Any]:
        def query() -> list[dict[str, Any]]:
            return (
                self._client.table(table)
                .update(dict(values))
                .eq("id", row_id)
                .execute()
                .data
                or []
            )

        try:
            data = await self._run(query)
        except Exception as e:
            logger.error("update_failed", table=table, row_id=row_id, error=str(e))
            raise MutationError(table, f"Error updating {table}: {e}") from e
        if not data:
            raise MutationError(table, f"Row {row_id} not found in {table}")
        return data[0]

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    async def sign_in_with_password(self, email: str, password: str) -> AuthSessionInfo:
        try:
            response = await self._run(
                lambda: self._client.auth.sign_in_with_password(
                    {"email": email, "password": password}
                )
            )
        except Exception as e:
            logger.warning("sign_in_failed", email=email, error=str(e))
            raise AuthError(str(e), code="sign_in_failed") from e

        session = _to_session(response.session)
        if session is None:
            raise AuthError("Sign in did not return a session", code="no_session")
        return session

    async def sign_up(self, email: str, password: str, full_name: str) -> AuthUser | None:
        try:
            response = await self._run(
                lambda: self._client.auth.sign_up(
                    {
                        "email": email,
                        "password": password,
                        "options": {"data": {"full_name": full_name}},
                    }
                )
            )
        except Exception as e:
            logger.warning("sign_up_failed", email=email, error=str(e))
            raise AuthError(str(e), code="sign_up_failed") from e
        return _to_user(response.user)

    async def sign_out(self) -> None:
        await self._run(self._client.auth.sign_out)

    async def get_session(self) -> AuthSessionInfo | None:
        try:
            session = await self._run(self._client.auth.get_session)
        except Exception as e:
            logger.warning("get_session_failed", error=str(e))
            return None
        return _to_session(session)

    def on_auth_state_change(self, callback: AuthStateCallback) -> Subscription:
        """Subscribe to SDK auth events.

        The SDK may fire events from its own refresh thread. When subscribed
        from inside an event loop, events are handed back to that loop so the
        callback never races request handlers.
        """
        loop = _running_loop()

        def handler(event: Any, session: Any) -> None:
            translated = _to_session(session)
            if loop is None or _running_loop() is loop:
                callback(str(event), translated)
            else:
                loop.call_soon_threadsafe(callback, str(event), translated)

        sdk_subscription = self._client.auth.on_auth_state_change(handler)
        return Subscription(_unsubscribe=sdk_subscription.unsubscribe)
