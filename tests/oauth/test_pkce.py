"""Tests for PKCE helpers."""

from urllib.parse import parse_qs, urlparse

import pytest

from src.oauth.pkce import (
    DEFAULT_SCOPES,
    VERIFIER_CHARSET,
    build_authorization_url,
    code_challenge,
    generate_code_verifier,
    generate_pkce_pair,
    generate_state,
    validate_callback,
)


class TestCodeVerifier:
    """Tests for verifier and challenge generation."""

    def test_default_verifier_length_and_charset(self):
        verifier = generate_code_verifier()

        assert len(verifier) == 128
        assert set(verifier) <= set(VERIFIER_CHARSET)

    def test_verifiers_are_random(self):
        assert generate_code_verifier() != generate_code_verifier()

    @pytest.mark.parametrize("length", [42, 129])
    def test_verifier_length_bounds(self, length):
        with pytest.raises(ValueError):
            generate_code_verifier(length)

    def test_challenge_matches_rfc7636_vector(self):
        """RFC 7636 appendix B example."""
        verifier = "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"

        assert code_challenge(verifier) == "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM"

    def test_pair_is_consistent(self):
        verifier, challenge = generate_pkce_pair()

        assert code_challenge(verifier) == challenge
        assert "=" not in challenge

    def test_state_length(self):
        assert len(generate_state()) == 32


class TestAuthorizationUrl:
    """Tests for build_authorization_url."""

    def test_url_parameters(self):
        url = build_authorization_url(
            client_id="client-123",
            redirect_uri="https://app.example.com/auth/callback",
            challenge="challenge-abc",
            state="state-xyz",
        )

        parsed = urlparse(url)
        params = {k: v[0] for k, v in parse_qs(parsed.query).items()}

        assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == (
            "https://accounts.google.com/o/oauth2/v2/auth"
        )
        assert params == {
            "client_id": "client-123",
            "redirect_uri": "https://app.example.com/auth/callback",
            "response_type": "code",
            "scope": " ".join(DEFAULT_SCOPES),
            "state": "state-xyz",
            "code_challenge": "challenge-abc",
            "code_challenge_method": "S256",
            "access_type": "offline",
            "prompt": "consent",
        }

    def test_custom_scopes(self):
        url = build_authorization_url("id", "https://app/cb", "c", "s", scopes=["openid"])

        assert parse_qs(urlparse(url).query)["scope"] == ["openid"]


class TestValidateCallback:
    """Tests for validate_callback."""

    def test_valid_callback(self):
        assert validate_callback("state", "state", "code") is True

    def test_state_mismatch(self):
        assert validate_callback("state", "other", "code") is False

    def test_no_stored_state(self):
        assert validate_callback(None, "state", "code") is False

    def test_missing_code(self):
        assert validate_callback("state", "state", "") is False
