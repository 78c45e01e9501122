"""Unit tests for session token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from social.config import AuthSettings
from social.util.jwt import (
    InvalidSignatureError,
    MalformedTokenError,
    TokenExpiredError,
    create_token,
    verify_token,
)


class TestCreateToken:
    """Tests for create_token()."""

    def test_token_carries_user_claims(self, auth_settings):
        """Token payload should hold user_id, email, iat and exp."""
        # Act
        token = create_token(42, "alice@example.com", auth_settings)

        # Assert
        payload = jwt.decode(token, auth_settings.jwt_secret, algorithms=["HS256"])
        assert payload["user_id"] == 42
        assert payload["email"] == "alice@example.com"
        assert payload["exp"] - payload["iat"] == 72 * 3600

    def test_token_uses_hs256(self, auth_settings):
        """Token header should declare HS256."""
        token = create_token(1, "a@example.com", auth_settings)

        assert jwt.get_unverified_header(token)["alg"] == "HS256"


class TestVerifyToken:
    """Tests for verify_token()."""

    def test_round_trip_returns_claims(self, auth_settings):
        """A fresh token should verify to its claims."""
        token = create_token(7, "bob@example.com", auth_settings)

        claims = verify_token(token, auth_settings)

        assert claims.user_id == 7
        assert claims.email == "bob@example.com"
        assert claims.exp - claims.iat == timedelta(hours=72)

    def test_expired_token_is_rejected(self, auth_settings):
        """A token past its expiry should raise TokenExpiredError."""
        issued = datetime.now(timezone.utc) - timedelta(hours=73)
        token = create_token(7, "bob@example.com", auth_settings, now=issued)

        with pytest.raises(TokenExpiredError):
            verify_token(token, auth_settings)

    def test_token_just_before_expiry_is_accepted(self, auth_settings):
        """A token one minute from expiry should still verify."""
        issued = datetime.now(timezone.utc) - timedelta(hours=71, minutes=59)
        token = create_token(7, "bob@example.com", auth_settings, now=issued)

        assert verify_token(token, auth_settings).user_id == 7

    def test_wrong_secret_is_invalid_signature(self, auth_settings):
        """A token signed with another secret should raise InvalidSignatureError."""
        other = AuthSettings(jwt_secret="another-secret-entirely")
        token = create_token(7, "bob@example.com", other)

        with pytest.raises(InvalidSignatureError):
            verify_token(token, auth_settings)

    def test_expired_token_with_wrong_secret_reports_expiry(self, auth_settings):
        """Expiry takes precedence over a bad signature."""
        other = AuthSettings(jwt_secret="another-secret-entirely")
        issued = datetime.now(timezone.utc) - timedelta(days=4)
        token = create_token(7, "bob@example.com", other, now=issued)

        with pytest.raises(TokenExpiredError):
            verify_token(token, auth_settings)

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    def test_garbage_is_malformed(self, auth_settings, token):
        """Undecodable input should raise MalformedTokenError."""
        with pytest.raises(MalformedTokenError):
            verify_token(token, auth_settings)

    def test_missing_user_id_is_malformed(self, auth_settings):
        """A correctly signed token without user_id should be rejected."""
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"email": "x@example.com", "iat": now, "exp": now + timedelta(hours=1)},
            auth_settings.jwt_secret,
            algorithm="HS256",
        )

        with pytest.raises(MalformedTokenError):
            verify_token(token, auth_settings)

    def test_missing_exp_is_malformed(self, auth_settings):
        """Tokens without an expiry are not accepted."""
        token = jwt.encode(
            {"user_id": 1, "email": "x@example.com", "iat": datetime.now(timezone.utc)},
            auth_settings.jwt_secret,
            algorithm="HS256",
        )

        with pytest.raises(MalformedTokenError):
            verify_token(token, auth_settings)
