"""Tests for JWT verification."""

from datetime import UTC
from datetime import datetime
from datetime import timedelta
from uuid import uuid4

import jwt
import pytest

from casework_api.auth.jwt_service import JWTService
from casework_api.config.auth import AuthSettings
from casework_api.database.models.base import UserRole

SECRET = "test-secret-key-that-is-long-enough-for-hs256"


@pytest.fixture
def auth_settings():
    """Auth settings with a known secret."""
    return AuthSettings(jwt_secret_key=SECRET, cookie_secure=False)


@pytest.fixture
def jwt_service(auth_settings):
    """JWT service bound to the test settings."""
    return JWTService(auth_settings)


def make_token(
    sub=None,
    role="member",
    issuer="casework-auth",
    audience="casework-api",
    expires_in=timedelta(hours=1),
    secret=SECRET,
    **extra,
):
    """Encode an access token the way the platform's auth service does."""
    now = datetime.now(UTC)
    claims = {
        "sub": str(sub or uuid4()),
        "role": role,
        "iss": issuer,
        "aud": audience,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_in).timestamp()),
        **extra,
    }
    return jwt.encode(claims, secret, algorithm="HS256")


class TestJWTService:
    """Test JWTService class."""

    def test_decode_valid_token(self, jwt_service):
        """Test decoding a valid access token."""
        user_pk = uuid4()

        claims = jwt_service.decode_token(make_token(sub=user_pk, role="moderator"))

        assert claims is not None
        assert claims.sub == user_pk
        assert claims.role == UserRole.MODERATOR
        assert claims.iss == "casework-auth"
        assert claims.aud == "casework-api"

    def test_decode_expired_token(self, jwt_service):
        """Test expired tokens are rejected."""
        token = make_token(expires_in=timedelta(minutes=-5))

        assert jwt_service.decode_token(token) is None

    def test_decode_wrong_secret(self, jwt_service):
        """Test tokens signed with another key are rejected."""
        token = make_token(secret="another-secret-key-that-is-long-enough-too")

        assert jwt_service.decode_token(token) is None

    def test_decode_wrong_audience(self, jwt_service):
        """Test tokens for another audience are rejected."""
        assert jwt_service.decode_token(make_token(audience="other-api")) is None

    def test_decode_wrong_issuer(self, jwt_service):
        """Test tokens from another issuer are rejected."""
        assert jwt_service.decode_token(make_token(issuer="someone-else")) is None

    def test_decode_malformed_token(self, jwt_service):
        """Test garbage input is rejected."""
        assert jwt_service.decode_token("not-a-jwt") is None

    def test_decode_unknown_role(self, jwt_service):
        """Test claims that fail model validation are rejected."""
        assert jwt_service.decode_token(make_token(role="superuser")) is None

    def test_decode_non_uuid_subject(self, jwt_service):
        """Test subjects must be user UUIDs."""
        assert jwt_service.decode_token(make_token(sub="user-42")) is None

    def test_decode_with_empty_secret(self):
        """Test an empty signing secret rejects tokens instead of erroring."""
        service = JWTService(AuthSettings(jwt_secret_key="", cookie_secure=False))

        assert service.decode_token(make_token()) is None
