"""Authentication configuration for the Casework API."""

from pydantic import Field
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class AuthSettings(BaseSettings):
    """Authentication configuration settings.

    Tokens are issued elsewhere; this service only verifies them.
    """

    # JWT Configuration
    jwt_secret_key: str = Field(..., description="JWT signing secret key")
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    jwt_issuer: str = Field(default="casework-auth", description="JWT issuer")
    jwt_audience: str = Field(default="casework-api", description="JWT audience")

    # Cookie Configuration
    cookie_secure: bool = Field(default=True, description="Use secure cookies")

    model_config = SettingsConfigDict(env_prefix="AUTH_", case_sensitive=False)

    @property
    def access_cookie_name(self) -> str:
        """Name of the cookie carrying the access token."""
        return "__Secure-cw_at" if self.cookie_secure else "cw_at"


def get_auth_settings() -> AuthSettings:
    """Get authentication settings instance."""
    from casework_api.config.settings import get_settings

    return get_settings().auth
