"""Fixtures for F4 tests - Web API and CLI."""

import pytest
from fastapi.testclient import TestClient

from skillfriend.web.api import create_app
from skillfriend.web.sessions import CLIENT_SESSION_HEADER


@pytest.fixture
def demo_client(fast_config):
    """Test client on the demo backend (no credentials configured)."""
    return TestClient(create_app(config=fast_config))


@pytest.fixture
def live_client(fast_config, accepting_factory):
    """Test client whose backends accept the demo user's credentials."""
    return TestClient(create_app(config=fast_config, backend_factory=accepting_factory))


def open_session(client: TestClient) -> dict[str, str]:
    """Create a client session and return the header that identifies it."""
    response = client.post("/api/auth/session")
    assert response.status_code == 201
    return {CLIENT_SESSION_HEADER: response.json()["client_id"]}


@pytest.fixture
def demo_headers(demo_client):
    return open_session(demo_client)


@pytest.fixture
def live_headers(live_client):
    return open_session(live_client)


@pytest.fixture
def signed_in_headers(live_client, live_headers, credentials):
    response = live_client.post("/api/auth/sign-in", json=credentials, headers=live_headers)
    assert response.status_code == 200
    return live_headers
