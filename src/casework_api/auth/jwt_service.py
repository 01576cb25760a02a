"""JWT verification for the Casework API."""

import logging

import jwt

from jwt import ExpiredSignatureError
from jwt import PyJWTError
from pydantic import ValidationError

from casework_api.auth.models import TokenClaims
from casework_api.config.auth import AuthSettings
from casework_api.config.auth import get_auth_settings

logger = logging.getLogger(__name__)


class JWTService:
    """Validates access tokens issued by the platform's auth service."""

    def __init__(self, settings: AuthSettings | None = None):
        self._settings = settings or get_auth_settings()

    def decode_token(self, token: str) -> TokenClaims | None:
        """Decode and validate JWT token."""
        try:
            claims = jwt.decode(
                token,
                self._settings.jwt_secret_key,
                algorithms=[self._settings.jwt_algorithm],
                audience=self._settings.jwt_audience,
                issuer=self._settings.jwt_issuer,
            )
            return TokenClaims(**claims)
        except ExpiredSignatureError:
            logger.debug("Access token expired")
            return None
        except (PyJWTError, ValidationError) as e:
            logger.debug(f"Access token rejected: {e!s}")
            return None
