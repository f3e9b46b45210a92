"""Pytest fixtures for FastAPI server tests.

This module provides test clients, OAuth environment setup and a
factory for mocked provider responses.
"""

from typing import Any, Callable, Optional
from unittest import mock

import pytest
from fastapi.testclient import TestClient

from src.server.config import Settings
from src.server.main import create_app


@pytest.fixture
def oauth_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set server-side Google OAuth credentials."""
    monkeypatch.setenv("GOOGLE_CLIENT_ID", "test_client_id")
    monkeypatch.setenv("GOOGLE_CLIENT_SECRET", "test_client_secret")
    monkeypatch.delenv("GOOGLE_TOKEN_URL", raising=False)


@pytest.fixture
def no_oauth_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove server-side Google OAuth credentials."""
    monkeypatch.delenv("GOOGLE_CLIENT_ID", raising=False)
    monkeypatch.delenv("GOOGLE_CLIENT_SECRET", raising=False)


@pytest.fixture(scope="function")
def client() -> TestClient:
    """Create a test client on a fresh application.

    Each test gets its own app so rate limiter counters never leak
    between tests.

    Example:
        >>> def test_endpoint(client):
        >>>     response = client.get("/health")
        >>>     assert response.status_code == 200
    """
    with TestClient(create_app(Settings())) as test_client:
        yield test_client


@pytest.fixture
def make_client() -> Callable[..., TestClient]:
    """Factory for test clients with custom settings."""
    clients = []

    def _make(**overrides: Any) -> TestClient:
        test_client = TestClient(create_app(Settings(**overrides)))
        clients.append(test_client)
        return test_client

    yield _make

    for test_client in clients:
        test_client.close()


@pytest.fixture
def make_provider_response() -> Callable[..., mock.Mock]:
    """Factory for mocked ``requests.post`` responses from the token endpoint.

    Passing ``text`` without ``json_data`` simulates a non-JSON body.
    """

    def _make(
        status_code: int = 200,
        json_data: Optional[Any] = None,
        text: str = "",
    ) -> mock.Mock:
        mock_response = mock.Mock()
        mock_response.status_code = status_code
        mock_response.text = text
        if json_data is None and text:
            mock_response.json.side_effect = ValueError("No JSON object could be decoded")
        else:
            mock_response.json.return_value = json_data
        return mock_response

    return _make
