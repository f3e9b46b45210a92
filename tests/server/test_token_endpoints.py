"""Tests for the token exchange and refresh endpoints.

The provider token endpoint is mocked at ``requests.post``.
"""

from unittest import mock

import pytest
import requests
from fastapi import status
from fastapi.testclient import TestClient

from src.oauth.config import GOOGLE_TOKEN_URL

EXCHANGE_BODY = {
    "code": "abc",
    "code_verifier": "v",
    "redirect_uri": "https://app/cb",
}


class TestExchangeGoogleToken:
    """Tests for POST /exchange-google-token."""

    @mock.patch("requests.post")
    def test_exchange_scenario(self, mock_post, client: TestClient, oauth_env, make_provider_response):
        """Scope string is normalized and an absent refresh token is omitted."""
        mock_post.return_value = make_provider_response(
            json_data={
                "access_token": "tok",
                "expires_in": 3600,
                "scope": "a b c",
                "token_type": "Bearer",
            }
        )

        response = client.post("/exchange-google-token", json=EXCHANGE_BODY)

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "access_token": "tok",
            "expires_in": 3600,
            "scope": ["a", "b", "c"],
            "token_type": "Bearer",
        }
        assert "refresh_token" not in response.json()
        assert response.headers["access-control-allow-origin"] == "*"

    @mock.patch("requests.post")
    def test_exchange_posts_pkce_grant(self, mock_post, client: TestClient, oauth_env, make_provider_response):
        """The provider receives an authorization_code grant with the verifier and secret."""
        mock_post.return_value = make_provider_response(
            json_data={
                "access_token": "tok",
                "refresh_token": "refresh",
                "expires_in": 3599,
                "scope": "openid email",
                "token_type": "Bearer",
            }
        )

        response = client.post("/exchange-google-token", json=EXCHANGE_BODY)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["refresh_token"] == "refresh"
        assert response.json()["scope"] == ["openid", "email"]

        mock_post.assert_called_once()
        call_args = mock_post.call_args
        assert call_args[0][0] == GOOGLE_TOKEN_URL
        assert call_args[1]["timeout"] == 30
        assert call_args[1]["data"] == {
            "code": "abc",
            "client_id": "test_client_id",
            "client_secret": "test_client_secret",
            "redirect_uri": "https://app/cb",
            "grant_type": "authorization_code",
            "code_verifier": "v",
        }

    @pytest.mark.parametrize("missing", ["code", "code_verifier", "redirect_uri"])
    @mock.patch("requests.post")
    def test_missing_field_is_400(self, mock_post, missing, client: TestClient, oauth_env):
        """Any absent field is rejected before the provider is called."""
        body = {k: v for k, v in EXCHANGE_BODY.items() if k != missing}

        response = client.post("/exchange-google-token", json=body)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Missing required parameters"
        mock_post.assert_not_called()

    @mock.patch("requests.post")
    def test_empty_field_is_400(self, mock_post, client: TestClient, oauth_env):
        response = client.post("/exchange-google-token", json={**EXCHANGE_BODY, "code": ""})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        mock_post.assert_not_called()

    @mock.patch("requests.post")
    def test_validation_checked_before_configuration(self, mock_post, client: TestClient, no_oauth_env):
        response = client.post("/exchange-google-token", json={})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        mock_post.assert_not_called()

    @mock.patch("requests.post")
    def test_missing_credentials_is_500(self, mock_post, client: TestClient, no_oauth_env):
        """Unset client credentials fail without calling the provider."""
        response = client.post("/exchange-google-token", json=EXCHANGE_BODY)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"error": "Server configuration error"}
        mock_post.assert_not_called()

    @mock.patch("requests.post")
    def test_upstream_rejection_mirrors_status(
        self, mock_post, client: TestClient, oauth_env, make_provider_response
    ):
        """Provider status and error body are propagated unchanged."""
        provider_error = {"error": "invalid_grant", "error_description": "Bad Request"}
        mock_post.return_value = make_provider_response(status_code=400, json_data=provider_error)

        response = client.post("/exchange-google-token", json=EXCHANGE_BODY)

        assert response.status_code == 400
        assert response.json() == {"error": "Token exchange failed", "details": provider_error}

    @mock.patch("requests.post")
    def test_upstream_non_json_error_body(
        self, mock_post, client: TestClient, oauth_env, make_provider_response
    ):
        mock_post.return_value = make_provider_response(status_code=503, text="Service Unavailable")

        response = client.post("/exchange-google-token", json=EXCHANGE_BODY)

        assert response.status_code == 503
        assert response.json()["details"] == "Service Unavailable"

    @mock.patch("requests.post")
    def test_network_error_is_502(self, mock_post, client: TestClient, oauth_env):
        mock_post.side_effect = requests.ConnectionError("connection refused")

        response = client.post("/exchange-google-token", json=EXCHANGE_BODY)

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.json()["error"] == "Token exchange failed"
        assert "connection refused" in response.json()["details"]

    @mock.patch("requests.post")
    def test_mistyped_provider_body_is_502(
        self, mock_post, client: TestClient, oauth_env, make_provider_response
    ):
        """A 2xx provider body with non-string token fields is an upstream failure."""
        mock_post.return_value = make_provider_response(
            json_data={"access_token": 123, "expires_in": 3600, "token_type": ["Bearer"]}
        )

        response = client.post("/exchange-google-token", json=EXCHANGE_BODY)

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.json()["error"] == "Token exchange failed"
        assert "Invalid response" in response.json()["details"]

    @mock.patch("requests.post")
    def test_unexpected_error_is_500_with_message(self, mock_post, client: TestClient, oauth_env):
        mock_post.side_effect = RuntimeError("boom")

        response = client.post("/exchange-google-token", json=EXCHANGE_BODY)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"error": "Internal server error", "message": "boom"}

    @mock.patch("requests.post")
    def test_malformed_body_is_400(self, mock_post, client: TestClient, oauth_env):
        response = client.post(
            "/exchange-google-token",
            content="not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Invalid request body"
        assert "details" in response.json()
        mock_post.assert_not_called()

    def test_options_returns_cors_headers(self, client: TestClient):
        response = client.options("/exchange-google-token")

        assert response.status_code == status.HTTP_200_OK
        assert response.headers["access-control-allow-origin"] == "*"
        assert "POST" in response.headers["access-control-allow-methods"]

    def test_browser_preflight(self, client: TestClient):
        response = client.options(
            "/exchange-google-token",
            headers={
                "Origin": "https://app.example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "content-type",
            },
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.headers["access-control-allow-origin"] == "*"


class TestRefreshGoogleToken:
    """Tests for POST /refresh-google-token."""

    @mock.patch("requests.post")
    def test_refresh_success(self, mock_post, client: TestClient, oauth_env, make_provider_response):
        """A refresh returns a new access token and no refresh_token field."""
        mock_post.return_value = make_provider_response(
            json_data={
                "access_token": "new_access",
                "expires_in": 3599,
                "scope": "openid https://www.googleapis.com/auth/calendar.events",
                "token_type": "Bearer",
            }
        )

        response = client.post("/refresh-google-token", json={"refresh_token": "stored_refresh"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "access_token": "new_access",
            "expires_in": 3599,
            "scope": ["openid", "https://www.googleapis.com/auth/calendar.events"],
            "token_type": "Bearer",
        }

        data = mock_post.call_args[1]["data"]
        assert data["grant_type"] == "refresh_token"
        assert data["refresh_token"] == "stored_refresh"
        assert data["client_secret"] == "test_client_secret"

    @mock.patch("requests.post")
    def test_rotated_refresh_token_is_passed_through(
        self, mock_post, client: TestClient, oauth_env, make_provider_response
    ):
        mock_post.return_value = make_provider_response(
            json_data={
                "access_token": "new_access",
                "refresh_token": "rotated",
                "expires_in": 3599,
                "scope": "openid",
                "token_type": "Bearer",
            }
        )

        response = client.post("/refresh-google-token", json={"refresh_token": "old"})

        assert response.json()["refresh_token"] == "rotated"

    @mock.patch("requests.post")
    def test_missing_refresh_token_is_400(self, mock_post, client: TestClient, oauth_env):
        response = client.post("/refresh-google-token", json={})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"error": "Missing refresh token"}
        mock_post.assert_not_called()

    @mock.patch("requests.post")
    def test_missing_credentials_is_500(self, mock_post, client: TestClient, no_oauth_env):
        response = client.post("/refresh-google-token", json={"refresh_token": "r"})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        mock_post.assert_not_called()

    @mock.patch("requests.post")
    def test_upstream_rejection(self, mock_post, client: TestClient, oauth_env, make_provider_response):
        provider_error = {"error": "invalid_grant", "error_description": "Token has been expired or revoked."}
        mock_post.return_value = make_provider_response(status_code=400, json_data=provider_error)

        response = client.post("/refresh-google-token", json={"refresh_token": "revoked"})

        assert response.status_code == 400
        assert response.json() == {"error": "Token refresh failed", "details": provider_error}

    def test_options_returns_cors_headers(self, client: TestClient):
        response = client.options("/refresh-google-token")

        assert response.status_code == status.HTTP_200_OK
        assert response.headers["access-control-allow-origin"] == "*"
