"""Unit tests for session token utilities."""

from datetime import datetime, timedelta, timezone

import jwt as pyjwt
import pytest

from presence.config import AuthSettings
from presence.util.jwt import JWTError, create_token, verify_token

SETTINGS = AuthSettings(jwt_secret="unit-test-secret-0123456789abcdef")


class TestSessionToken:
    """Tests for create_token and verify_token."""

    def test_round_trip_claims(self):
        token = create_token("user-1", "octocat", "github", SETTINGS)

        payload = verify_token(token, SETTINGS)

        assert payload.user_id == "user-1"
        assert payload.username == "octocat"
        assert payload.provider == "github"
        assert payload.exp > datetime.now(timezone.utc) + timedelta(days=29)

    def test_token_carries_no_billing_state(self):
        """Billing state is projected on read, never baked into the token."""
        token = create_token("user-1", "octocat", "github", SETTINGS)

        claims = pyjwt.decode(
            token, SETTINGS.jwt_secret, algorithms=[SETTINGS.jwt_algorithm]
        )

        assert set(claims) == {"user_id", "username", "provider", "iat", "exp"}

    def test_expired_token_rejected(self):
        token = pyjwt.encode(
            {
                "user_id": "user-1",
                "username": "octocat",
                "provider": "github",
                "exp": datetime.now(timezone.utc) - timedelta(seconds=1),
            },
            SETTINGS.jwt_secret,
            algorithm=SETTINGS.jwt_algorithm,
        )

        with pytest.raises(JWTError, match="expired"):
            verify_token(token, SETTINGS)

    def test_wrong_secret_rejected(self):
        token = create_token("user-1", "octocat", "github", SETTINGS)
        other = AuthSettings(jwt_secret="another-secret-0123456789abcdef0")

        with pytest.raises(JWTError, match="Invalid"):
            verify_token(token, other)

    def test_missing_identity_claim_rejected(self):
        token = pyjwt.encode(
            {
                "user_id": "user-1",
                "exp": datetime.now(timezone.utc) + timedelta(days=1),
            },
            SETTINGS.jwt_secret,
            algorithm=SETTINGS.jwt_algorithm,
        )

        with pytest.raises(JWTError, match="Invalid"):
            verify_token(token, SETTINGS)
