"""Application configuration loader.

Loads settings from configs/app_config.yaml, falling back to built-in
defaults. Backend credentials always come from the environment:

    SUPABASE_URL / SUPABASE_ANON_KEY
    (VITE_SUPABASE_URL / VITE_SUPABASE_ANON_KEY are accepted too)

Usage:
    from skillfriend.config.app_config import load_app_config

    config = load_app_config()
    config.backend.url
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("configs/app_config.yaml")

URL_ENV_VARS = ("SUPABASE_URL", "VITE_SUPABASE_URL")
KEY_ENV_VARS = ("SUPABASE_ANON_KEY", "VITE_SUPABASE_ANON_KEY")

ENV_TEMPLATE = """# Supabase Configuration
SUPABASE_URL=https://your-project-ref.supabase.co
SUPABASE_ANON_KEY=your-anon-key-here"""


@dataclass
class BackendConfig:
    """Remote backend credentials."""

    url: str | None = None
    anon_key: str | None = None


@dataclass
class DemoConfig:
    """Simulated latency for the demo backend, in seconds."""

    auth_latency: float = 1.0
    read_latency: float = 0.0
    write_latency: float = 0.0


@dataclass
class ChallengeConfig:
    """Challenge timer settings."""

    duration_seconds: int = 300


@dataclass
class CoursesConfig:
    """Course enrollment settings."""

    payment_delay_seconds: float = 2.0


@dataclass
class AppConfig:
    """Application-wide configuration."""

    backend: BackendConfig = field(default_factory=BackendConfig)
    demo: DemoConfig = field(default_factory=DemoConfig)
    challenge: ChallengeConfig = field(default_factory=ChallengeConfig)
    courses: CoursesConfig = field(default_factory=CoursesConfig)
    leaderboard_limit: int = 10


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "demo": {"auth_latency": 1.0, "read_latency": 0.0, "write_latency": 0.0},
        "challenge": {"duration_seconds": 300},
        "courses": {"payment_delay_seconds": 2.0},
        "leaderboard": {"limit": 10},
    }


def _first_env(env: Mapping[str, str], names: tuple[str, ...]) -> str | None:
    for name in names:
        value = env.get(name)
        if value:
            return value.strip()
    return None


def _parse_config(data: dict[str, Any], env: Mapping[str, str]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    defaults = _get_defaults()

    demo_data = {**defaults["demo"], **(data.get("demo") or {})}
    challenge_data = {**defaults["challenge"], **(data.get("challenge") or {})}
    courses_data = {**defaults["courses"], **(data.get("courses") or {})}
    leaderboard_data = {**defaults["leaderboard"], **(data.get("leaderboard") or {})}

    return AppConfig(
        backend=BackendConfig(
            url=_first_env(env, URL_ENV_VARS),
            anon_key=_first_env(env, KEY_ENV_VARS),
        ),
        demo=DemoConfig(
            auth_latency=float(demo_data["auth_latency"]),
            read_latency=float(demo_data["read_latency"]),
            write_latency=float(demo_data["write_latency"]),
        ),
        challenge=ChallengeConfig(
            duration_seconds=int(challenge_data["duration_seconds"]),
        ),
        courses=CoursesConfig(
            payment_delay_seconds=float(courses_data["payment_delay_seconds"]),
        ),
        leaderboard_limit=int(leaderboard_data["limit"]),
    )


def load_app_config(
    force_reload: bool = False,
    config_file: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> AppConfig:
    """Load application config.

    Args:
        force_reload: If True, ignore cached config and reload from file.
        config_file: Override the YAML path (defaults to CONFIG_FILE).
        env: Override the environment mapping (defaults to os.environ).

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    path = config_file or CONFIG_FILE
    data: dict[str, Any]

    if path.exists():
        logger.debug("loading_app_config", source=str(path))
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    else:
        logger.info("using_default_config")
        data = _get_defaults()

    _cached_config = _parse_config(data, os.environ if env is None else env)
    return _cached_config


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when the environment changes at runtime.
    """
    global _cached_config
    _cached_config = None
