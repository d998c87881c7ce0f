"""Configuration package for Skill Friend."""

from skillfriend.config.app_config import (
    AppConfig,
    BackendConfig,
    ChallengeConfig,
    CoursesConfig,
    DemoConfig,
    clear_config_cache,
    load_app_config,
)

__all__ = [
    "AppConfig",
    "BackendConfig",
    "ChallengeConfig",
    "CoursesConfig",
    "DemoConfig",
    "clear_config_cache",
    "load_app_config",
]
