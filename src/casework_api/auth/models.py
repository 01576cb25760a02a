"""Authentication models for the Casework API."""

from uuid import UUID

from pydantic import BaseModel
from pydantic import Field

from casework_api.database.models.base import UserRole


class TokenClaims(BaseModel):
    """JWT access token claims."""

    sub: UUID = Field(description="User UUID")
    role: UserRole = Field(description="User role")
    iss: str = Field(description="Token issuer")
    aud: str = Field(description="Token audience")
    iat: int = Field(description="Issued at timestamp")
    exp: int = Field(description="Expiration timestamp")
    nbf: int | None = Field(default=None, description="Not before timestamp")
