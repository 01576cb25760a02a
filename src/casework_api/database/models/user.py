"""User models for the Casework API."""

from uuid import UUID

from pydantic import BaseModel
from pydantic import ConfigDict

from casework_api.database.models.base import STAFF_ROLES
from casework_api.database.models.base import BaseDBModel
from casework_api.database.models.base import UserRole


class User(BaseDBModel):
    """User database model."""

    email: str
    username: str
    role: UserRole = UserRole.MEMBER
    is_banned: bool = False
    is_active: bool = True

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES

    def as_actor(self) -> "Actor":
        """Identity handed to the case validators."""
        return Actor(pk=self.pk, role=self.role)


class Actor(BaseModel):
    """The identity performing a request."""

    pk: UUID
    role: UserRole

    model_config = ConfigDict(frozen=True)

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES
