"""In-memory demo backend.

Used whenever no valid Supabase credentials are configured. Reads are
served from static fixtures; auth mutations are always rejected so the demo
never appears to create real accounts.
"""

from __future__ import annotations

import asyncio
import copy
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

import structlog

from skillfriend.backend import fixtures
from skillfriend.backend.base import AuthStateCallback, BackendClient, Subscription
from skillfriend.backend.errors import DemoModeError, MutationError
from skillfriend.backend.models import (
    COURSES,
    GAMES,
    LEADERBOARD,
    PROFILES,
    AuthSessionInfo,
    AuthUser,
)

logger = structlog.get_logger(__name__)

DEMO_SIGN_IN_MESSAGE = "Demo mode: Please set up Supabase to enable real authentication."
DEMO_SIGN_UP_MESSAGE = (
    "Demo mode: Sign up is disabled. In production, this would create a real account. "
    "Set up Supabase to enable registration."
)


@dataclass
class MockLatency:
    """Simulated network latency in seconds."""

    auth: float = 1.0
    read: float = 0.0
    write: float = 0.0


class MockBackend(BackendClient):
    """Backend stand-in serving canned fixtures."""

    is_demo = True

    def __init__(self, latency: MockLatency | None = None) -> None:
        self.latency = latency or MockLatency()
        self._tables: dict[str, list[dict[str, Any]]] = {
            PROFILES: fixtures.demo_users(),
            COURSES: fixtures.demo_courses(),
            GAMES: fixtures.demo_games(),
        }

    async def _sleep(self, seconds: float) -> None:
        if seconds > 0:
            await asyncio.sleep(seconds)

    def _rows(self, table: str) -> list[dict[str, Any]]:
        if table == LEADERBOARD:
            # Derived projection of profiles
            return [
                {"id": p["id"], "full_name": p.get("full_name"), "points": p.get("points", 0)}
                for p in self._tables.get(PROFILES, [])
            ]
        return self._tables.setdefault(table, [])

    async def select(
        self,
        table: str,
        *,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        ascending: bool = True,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        await self._sleep(self.latency.read)
        rows = [r for r in self._rows(table) if _matches(r, filters or {})]
        if order_by is not None:
            rows.sort(key=lambda r: r.get(order_by) or 0, reverse=not ascending)
        if limit is not None:
            rows = rows[:limit]
        logger.debug("mock_select", table=table, rows=len(rows))
        return copy.deepcopy(rows)

    async def insert(self, table: str, row: Mapping[str, Any]) -> dict[str, Any]:
        await self._sleep(self.latency.write)
        if table == LEADERBOARD:
            raise MutationError(table, "Leaderboard is read-only")
        record = {"id": uuid.uuid4().hex, **row}
        record.setdefault("created_at", datetime.now(timezone.utc).isoformat())
        self._rows(table).append(record)
        logger.debug("mock_insert", table=table, row_id=record["id"])
        return copy.deepcopy(record)

    async def update(
        self, table: str, row_id: str, values: Mapping[str, Any]
    ) -> dict[str, Any]:
        await self._sleep(self.latency.write)
        if table == LEADERBOARD:
            raise MutationError(table, "Leaderboard is read-only")
        for record in self._rows(table):
            if str(record.get("id")) == str(row_id):
                record.update(values)
                logger.debug("mock_update", table=table, row_id=row_id)
                return copy.deepcopy(record)
        raise MutationError(table, f"Row {row_id} not found in {table}")

    async def sign_in_with_password(self, email: str, password: str) -> AuthSessionInfo:
        await self._sleep(self.latency.auth)
        logger.info("mock_sign_in_rejected", email=email)
        raise DemoModeError(DEMO_SIGN_IN_MESSAGE)

    async def sign_up(self, email: str, password: str, full_name: str) -> AuthUser | None:
        await self._sleep(self.latency.auth)
        logger.info("mock_sign_up_rejected", email=email)
        raise DemoModeError(DEMO_SIGN_UP_MESSAGE)

    async def sign_out(self) -> None:
        return None

    async def get_session(self) -> AuthSessionInfo | None:
        return None

    def on_auth_state_change(self, callback: AuthStateCallback) -> Subscription:
        # The demo backend never emits auth events
        return Subscription()


def _matches(row: Mapping[str, Any], filters: Mapping[str, Any]) -> bool:
    return all(str(row.get(k)) == str(v) for k, v in filters.items())


def seed_rows(backend: MockBackend, table: str, rows: Iterable[Mapping[str, Any]]) -> None:
    """Replace the contents of a demo table (used by tests and previews)."""
    backend._tables[table] = [dict(r) for r in rows]
