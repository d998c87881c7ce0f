"""Tests for backend credential checks and backend selection (F1)."""

from unittest.mock import MagicMock

import pytest

from skillfriend.backend import live
from skillfriend.backend.errors import ConfigError
from skillfriend.backend.factory import (
    create_backend,
    has_valid_backend_config,
    is_valid_key,
    is_valid_url,
    validate_backend_config,
)
from skillfriend.backend.live import LiveBackend
from skillfriend.backend.mock import MockBackend
from skillfriend.config.app_config import AppConfig, BackendConfig, DemoConfig


class TestIsValidUrl:
    """Tests for is_valid_url."""

    def test_supabase_url_accepted(self, valid_credentials):
        assert is_valid_url(valid_credentials["url"])

    def test_localhost_accepted(self):
        assert is_valid_url("http://localhost:54321")

    def test_missing_scheme_rejected(self):
        """A bare host is not an absolute URL."""
        assert not is_valid_url("abcdefghijkl.supabase.co")

    def test_other_host_rejected(self):
        assert not is_valid_url("https://example.com")

    def test_not_a_url_rejected(self):
        assert not is_valid_url("not a url")

    def test_empty_rejected(self):
        assert not is_valid_url("")
        assert not is_valid_url(None)


class TestIsValidKey:
    """Tests for is_valid_key."""

    def test_long_key_accepted(self, valid_credentials):
        assert is_valid_key(valid_credentials["key"])

    def test_placeholder_rejected(self):
        assert not is_valid_key("your-anon-key-here")

    def test_template_prefix_rejected(self):
        """Anything containing 'your-' is a template value."""
        assert not is_valid_key("your-very-long-project-anon-key-value")

    def test_short_key_rejected(self):
        assert not is_valid_key("a" * 20)

    def test_21_chars_accepted(self):
        assert is_valid_key("a" * 21)

    def test_empty_rejected(self):
        assert not is_valid_key(None)


class TestValidateBackendConfig:
    """Tests for validate_backend_config error codes."""

    @pytest.mark.parametrize(
        "url,key,code",
        [
            (None, "x" * 30, "missing_url"),
            ("https://example.com", "x" * 30, "invalid_url"),
            ("https://abc.supabase.co", None, "missing_key"),
            ("https://abc.supabase.co", "your-anon-key-here", "invalid_key"),
        ],
    )
    def test_reports_first_problem(self, url, key, code):
        with pytest.raises(ConfigError) as exc_info:
            validate_backend_config(url, key)
        assert exc_info.value.code == code

    def test_valid_pair_passes(self, valid_credentials):
        validate_backend_config(valid_credentials["url"], valid_credentials["key"])
        assert has_valid_backend_config(valid_credentials["url"], valid_credentials["key"])

    def test_placeholder_key_with_valid_url_is_invalid(self, valid_credentials):
        assert not has_valid_backend_config(valid_credentials["url"], "your-anon-key-here")


class TestCreateBackend:
    """Tests for create_backend selection."""

    def test_no_credentials_gives_demo(self):
        backend = create_backend(AppConfig())
        assert isinstance(backend, MockBackend)
        assert backend.is_demo

    def test_demo_latency_from_config(self):
        config = AppConfig(demo=DemoConfig(auth_latency=0.25, read_latency=0.1, write_latency=0.0))
        backend = create_backend(config)
        assert backend.latency.auth == 0.25
        assert backend.latency.read == 0.1

    def test_valid_credentials_give_live(self, monkeypatch, valid_credentials):
        sdk_factory = MagicMock()
        monkeypatch.setattr(live, "create_client", sdk_factory)

        config = AppConfig(
            backend=BackendConfig(url=valid_credentials["url"], anon_key=valid_credentials["key"])
        )
        backend = create_backend(config)

        assert isinstance(backend, LiveBackend)
        assert not backend.is_demo
        sdk_factory.assert_called_once_with(valid_credentials["url"], valid_credentials["key"])

    def test_sdk_failure_falls_back_to_demo(self, monkeypatch, valid_credentials):
        """A client that cannot be constructed degrades to demo mode."""
        monkeypatch.setattr(live, "create_client", MagicMock(side_effect=RuntimeError("boom")))

        config = AppConfig(
            backend=BackendConfig(url=valid_credentials["url"], anon_key=valid_credentials["key"])
        )
        backend = create_backend(config)

        assert isinstance(backend, MockBackend)
