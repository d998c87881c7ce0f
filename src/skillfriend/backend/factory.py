"""Backend selection.

`has_valid_backend_config` is the single decision point between the live
Supabase backend and the demo mock.
"""

from __future__ import annotations

from urllib.parse import urlparse

import structlog

from skillfriend.backend.base import BackendClient
from skillfriend.backend.errors import ConfigError
from skillfriend.backend.mock import MockBackend, MockLatency
from skillfriend.config.app_config import AppConfig

logger = structlog.get_logger(__name__)

MIN_KEY_LENGTH = 20
PLACEHOLDER_KEY = "your-anon-key-here"
ALLOWED_HOST_MARKERS = ("supabase.co", "localhost")


def is_valid_url(url: str | None) -> bool:
    """Endpoint must be an absolute URL pointing at Supabase or localhost."""
    if not url:
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    if not parsed.scheme or not parsed.netloc:
        return False
    return any(marker in url for marker in ALLOWED_HOST_MARKERS)


def is_valid_key(key: str | None) -> bool:
    """Key must be long enough and not a template placeholder."""
    if not key:
        return False
    return len(key) > MIN_KEY_LENGTH and "your-" not in key and key != PLACEHOLDER_KEY


def validate_backend_config(url: str | None, key: str | None) -> None:
    """Check both credentials.

    Raises:
        ConfigError: Naming the first problem found.
    """
    if not url:
        raise ConfigError("SUPABASE_URL is not set", code="missing_url")
    if not is_valid_url(url):
        raise ConfigError(f"SUPABASE_URL is not a Supabase URL: {url}", code="invalid_url")
    if not key:
        raise ConfigError("SUPABASE_ANON_KEY is not set", code="missing_key")
    if not is_valid_key(key):
        raise ConfigError(
            "SUPABASE_ANON_KEY looks like a placeholder or is too short",
            code="invalid_key",
        )


def has_valid_backend_config(url: str | None, key: str | None) -> bool:
    """Return True if both credentials look usable."""
    try:
        validate_backend_config(url, key)
    except ConfigError:
        return False
    return True


def create_backend(config: AppConfig) -> BackendClient:
    """Build the live backend when configured, the demo mock otherwise.

    Never raises: missing credentials or an SDK that cannot be constructed
    degrade to demo mode.
    """
    demo = MockBackend(
        MockLatency(
            auth=config.demo.auth_latency,
            read=config.demo.read_latency,
            write=config.demo.write_latency,
        )
    )

    try:
        validate_backend_config(config.backend.url, config.backend.anon_key)
    except ConfigError as e:
        logger.warning("backend_not_configured", reason=e.code, mode="demo")
        return demo

    from skillfriend.backend.live import LiveBackend

    try:
        return LiveBackend(config.backend.url, config.backend.anon_key)
    except Exception as e:
        logger.error("live_backend_failed", error=str(e), mode="demo")
        return demo
