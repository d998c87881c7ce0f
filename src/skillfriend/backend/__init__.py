"""Backend client adapter: Supabase or in-memory demo."""

from skillfriend.backend.base import BackendClient, Subscription
from skillfriend.backend.errors import (
    AuthError,
    ChallengeError,
    ConfigError,
    DataFetchError,
    DemoModeError,
    MutationError,
    SkillFriendError,
)
from skillfriend.backend.factory import (
    create_backend,
    has_valid_backend_config,
    validate_backend_config,
)
from skillfriend.backend.mock import MockBackend, MockLatency

__all__ = [
    "BackendClient",
    "Subscription",
    "AuthError",
    "ChallengeError",
    "ConfigError",
    "DataFetchError",
    "DemoModeError",
    "MutationError",
    "SkillFriendError",
    "create_backend",
    "has_valid_backend_config",
    "validate_backend_config",
    "MockBackend",
    "MockLatency",
]
