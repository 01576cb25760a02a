"""Authentication dependencies for FastAPI endpoints."""

import logging

from collections.abc import Callable

from fastapi import Depends
from fastapi import HTTPException
from fastapi import Request
from fastapi import status

from casework_api.auth.jwt_service import JWTService
from casework_api.config.auth import get_auth_settings
from casework_api.database.models.base import UserRole
from casework_api.database.models.user import User
from casework_api.database.repositories.user import UserRepository

logger = logging.getLogger(__name__)

ROLE_HIERARCHY = {
    UserRole.MEMBER: 0,
    UserRole.MODERATOR: 1,
    UserRole.ADMIN: 2,
}


def _extract_access_token(request: Request) -> str | None:
    """Read the access token from the cookie or the Authorization header."""
    settings = get_auth_settings()

    access_token = request.cookies.get(settings.access_cookie_name)
    if access_token:
        return access_token

    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials

    return None


async def get_current_user(request: Request) -> User:
    """Get the current authenticated user from the request.

    Banned users are still authenticated so that they can appeal the ban.
    """
    access_token = _extract_access_token(request)
    if not access_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Access token required"
        )

    payload = JWTService().decode_token(access_token)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token"
        )

    user = await UserRepository().get_by_pk(payload.sub)

    if not user or not user.is_active:
        logger.warning(f"Token presented for unknown or inactive user: {payload.sub}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found"
        )

    return user


# Create dependency instance to avoid function calls in defaults
get_current_user_dependency = Depends(get_current_user)


def require_role(required_role: UserRole) -> Callable:
    """Dependency factory to require a specific role or higher."""

    async def role_dependency(current_user: User = get_current_user_dependency) -> User:
        """Check if user has required role."""
        user_level = ROLE_HIERARCHY.get(current_user.role, -1)
        required_level = ROLE_HIERARCHY.get(required_role, 999)

        if user_level < required_level:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required role: {required_role.value}",
            )

        return current_user

    return role_dependency


# Moderators and administrators
require_staff = require_role(UserRole.MODERATOR)
