"""User repository for the Casework API."""

from asyncpg import Record

from casework_api.database.models.user import User
from casework_api.database.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for user lookups."""

    def __init__(self):
        super().__init__("users")

    def _record_to_model(self, record: Record) -> User:
        """Convert database record to User model."""
        return User.model_validate(dict(record))
