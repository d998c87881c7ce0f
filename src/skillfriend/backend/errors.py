"""Error taxonomy for Skill Friend.

- ConfigError: missing/invalid backend credentials (demo mode, not fatal)
- AuthError: rejected credentials or demo-mode restriction (inline form message)
- DataFetchError: failed read (transient notification + empty state)
- MutationError: failed enroll/award write (notification, no retry)
- ChallengeError: invalid challenge transition (timed out, not started, ...)
"""

from __future__ import annotations

from typing import Any, Mapping


class SkillFriendError(Exception):
    """Base class for all application errors."""

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class ConfigError(SkillFriendError):
    """Backend credentials are missing or malformed."""


class AuthError(SkillFriendError):
    """Authentication request was rejected."""


class DemoModeError(AuthError):
    """Auth mutation attempted while running against the demo backend."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="demo_mode")


class DataFetchError(SkillFriendError):
    """A read from the backend failed."""

    def __init__(self, table: str, message: str) -> None:
        super().__init__(message, code="fetch_failed")
        self.table = table


class MutationError(SkillFriendError):
    """A write to the backend failed."""

    def __init__(self, table: str, message: str) -> None:
        super().__init__(message, code="mutation_failed")
        self.table = table


class ChallengeError(SkillFriendError):
    """A challenge action is not allowed in the current state."""


def serialize_error(error: Exception) -> Mapping[str, Any]:
    """Return a serialisable structure for logging."""
    if isinstance(error, SkillFriendError):
        return {
            "type": type(error).__name__,
            "code": error.code,
            "message": error.message,
        }
    return {"type": type(error).__name__, "message": str(error)}
