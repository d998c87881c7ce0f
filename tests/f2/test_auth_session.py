"""Tests for AuthSession (F2)."""

import pytest

from skillfriend.backend.base import SIGNED_IN, SIGNED_OUT, TOKEN_REFRESHED
from skillfriend.backend.errors import AuthError, DemoModeError
from skillfriend.backend.models import AuthSessionInfo, AuthUser
from skillfriend.core.session import ActionInProgressError, AuthSession, SessionState


class TestInitialize:
    """Initial auth state resolution."""

    def test_starts_loading(self, demo_backend):
        session = AuthSession(demo_backend)
        assert session.state is SessionState.LOADING
        assert session.loading

    @pytest.mark.asyncio
    async def test_demo_resolves_anonymous(self, demo_backend):
        session = AuthSession(demo_backend)
        await session.initialize()
        assert session.state is SessionState.ANONYMOUS
        assert session.is_demo
        assert session.user is None
        assert not session.loading

    @pytest.mark.asyncio
    async def test_existing_session_restored(self, accepting_backend):
        accepting_backend.current = AuthSessionInfo(user=AuthUser(id="2", email="alice@example.com"))
        session = AuthSession(accepting_backend)

        await session.initialize()

        assert session.is_authenticated
        assert session.profile.full_name == "Alice Johnson"
        assert session.profile.points == 320

    @pytest.mark.asyncio
    async def test_subscribes_once(self, accepting_backend):
        session = AuthSession(accepting_backend)
        await session.initialize()
        await session.initialize()
        assert len(accepting_backend.callbacks) == 1

        session.close()
        assert accepting_backend.callbacks == []


class TestSignIn:
    """Tests for sign_in."""

    @pytest.mark.asyncio
    async def test_sign_in_loads_profile(self, accepting_backend, credentials):
        session = AuthSession(accepting_backend)
        await session.initialize()

        profile = await session.sign_in(credentials["email"], credentials["password"])

        assert session.is_authenticated
        assert profile is not None
        assert profile.display_name == "Demo User"
        assert profile.points == 150

    @pytest.mark.asyncio
    async def test_wrong_password_keeps_anonymous(self, accepting_backend, credentials):
        session = AuthSession(accepting_backend)
        await session.initialize()

        with pytest.raises(AuthError) as exc_info:
            await session.sign_in(credentials["email"], "nope")

        assert exc_info.value.message == "Invalid login credentials"
        assert session.state is SessionState.ANONYMOUS

    @pytest.mark.asyncio
    async def test_demo_sign_in_raises_demo_error(self, demo_backend):
        session = AuthSession(demo_backend)
        await session.initialize()

        with pytest.raises(DemoModeError) as exc_info:
            await session.sign_in("demo@example.com", "Secret#123")

        assert "Demo mode" in exc_info.value.message
        assert not session.is_authenticated

    @pytest.mark.asyncio
    async def test_missing_profile_is_tolerated(self, accepting_backend):
        accepting_backend.credentials["ghost@example.com"] = ("404", "Secret#123")
        session = AuthSession(accepting_backend)
        await session.initialize()

        profile = await session.sign_in("ghost@example.com", "Secret#123")

        assert profile is None
        assert session.is_authenticated


class TestSignUp:
    """Tests for sign_up."""

    @pytest.mark.asyncio
    async def test_sign_up_does_not_sign_in(self, accepting_backend):
        session = AuthSession(accepting_backend)
        await session.initialize()

        user = await session.sign_up("new@example.com", "Secret#123", "New User")

        assert user.email == "new@example.com"
        assert accepting_backend.signed_up == [{"email": "new@example.com", "full_name": "New User"}]
        assert not session.is_authenticated

    @pytest.mark.asyncio
    async def test_demo_sign_up_rejected(self, demo_backend):
        session = AuthSession(demo_backend)
        await session.initialize()
        with pytest.raises(DemoModeError):
            await session.sign_up("new@example.com", "Secret#123", "New User")


class TestSignOut:
    """sign_out always leaves the session anonymous."""

    @pytest.mark.asyncio
    async def test_sign_out_clears(self, accepting_backend, credentials):
        session = AuthSession(accepting_backend)
        await session.initialize()
        await session.sign_in(credentials["email"], credentials["password"])

        await session.sign_out()

        assert session.state is SessionState.ANONYMOUS
        assert session.user is None
        assert session.profile is None

    @pytest.mark.asyncio
    async def test_sign_out_swallows_backend_failure(self, accepting_backend, credentials):
        async def failing_sign_out():
            raise RuntimeError("network down")

        session = AuthSession(accepting_backend)
        await session.initialize()
        await session.sign_in(credentials["email"], credentials["password"])
        accepting_backend.sign_out = failing_sign_out

        await session.sign_out()

        assert session.user is None
        assert session.profile is None


class TestRefreshProfile:
    """Tests for refresh_profile."""

    @pytest.mark.asyncio
    async def test_noop_when_anonymous(self, demo_backend):
        session = AuthSession(demo_backend)
        await session.initialize()
        assert await session.refresh_profile() is None
        assert session.profile is None

    @pytest.mark.asyncio
    async def test_picks_up_new_points(self, accepting_backend, credentials):
        session = AuthSession(accepting_backend)
        await session.initialize()
        await session.sign_in(credentials["email"], credentials["password"])

        await accepting_backend.update("profiles", "1", {"points": 400})
        profile = await session.refresh_profile()

        assert profile.points == 400
        assert session.profile.points == 400


class TestAuthEvents:
    """Backend-pushed auth-state changes."""

    @pytest.mark.asyncio
    async def test_signed_out_event_clears_user(self, accepting_backend, credentials):
        session = AuthSession(accepting_backend)
        await session.initialize()
        await session.sign_in(credentials["email"], credentials["password"])

        accepting_backend.emit(SIGNED_OUT, None)

        assert session.state is SessionState.ANONYMOUS
        assert session.profile is None

    @pytest.mark.asyncio
    async def test_token_refresh_keeps_profile(self, accepting_backend, credentials):
        session = AuthSession(accepting_backend)
        await session.initialize()
        await session.sign_in(credentials["email"], credentials["password"])

        accepting_backend.emit(TOKEN_REFRESHED, accepting_backend.current)

        assert session.is_authenticated
        assert session.profile is not None

    @pytest.mark.asyncio
    async def test_other_user_drops_cached_profile(self, accepting_backend, credentials):
        session = AuthSession(accepting_backend)
        await session.initialize()
        await session.sign_in(credentials["email"], credentials["password"])

        accepting_backend.emit(SIGNED_IN, AuthSessionInfo(user=AuthUser(id="3")))

        assert session.user.id == "3"
        assert session.profile is None
        await session.refresh_profile()
        assert session.profile.full_name == "Bob Smith"


class TestTrack:
    """In-flight action bookkeeping."""

    def test_duplicate_action_rejected(self, demo_backend):
        session = AuthSession(demo_backend)
        with session.track("enroll:1"):
            assert session.is_pending("enroll:1")
            with pytest.raises(ActionInProgressError):
                with session.track("enroll:1"):
                    pass
        assert not session.is_pending("enroll:1")

    def test_released_on_error(self, demo_backend):
        session = AuthSession(demo_backend)
        with pytest.raises(ValueError):
            with session.track("play:1"):
                raise ValueError("boom")
        assert not session.is_pending("play:1")

    @pytest.mark.asyncio
    async def test_to_dict(self, demo_backend):
        session = AuthSession(demo_backend)
        await session.initialize()
        data = session.to_dict()
        assert data["state"] == "anonymous"
        assert data["is_demo"] is True
        assert data["user"] is None
