"""Explicit result values for fetch and mutation call sites.

Sections never let a backend failure escape as an exception: a failed read
becomes an empty FetchResult carrying a notification, a failed write becomes
a MutationResult with ok=False.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")

DEFAULT = "default"
DESTRUCTIVE = "destructive"


@dataclass
class Notification:
    """A transient toast shown to the user."""

    title: str
    description: str
    variant: str = DEFAULT  # default | destructive

    @classmethod
    def error(cls, title: str, description: str) -> Notification:
        return cls(title=title, description=description, variant=DESTRUCTIVE)

    def to_dict(self) -> dict[str, str]:
        return {"title": self.title, "description": self.description, "variant": self.variant}


@dataclass
class FetchResult(Generic[T]):
    """Outcome of a read. `data` is always usable (empty on failure)."""

    data: T
    notification: Notification | None = None

    @property
    def ok(self) -> bool:
        return self.notification is None or self.notification.variant != DESTRUCTIVE


@dataclass
class MutationResult:
    """Outcome of a write."""

    ok: bool
    notification: Notification
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success(cls, title: str, description: str, **data: Any) -> MutationResult:
        return cls(ok=True, notification=Notification(title, description), data=data)

    @classmethod
    def failure(cls, title: str, description: str, **data: Any) -> MutationResult:
        return cls(ok=False, notification=Notification.error(title, description), data=data)


AUTH_REQUIRED_TITLE = "Authentication Required"
