"""Models for the moderation actions a case can be opened against."""

from datetime import datetime
from uuid import UUID

from casework_api.database.models.base import BaseDBModel
from casework_api.database.models.base import ContentType


class ContentRemoval(BaseDBModel):
    """A piece of content taken down by a moderator."""

    author_pk: UUID
    content_type: ContentType
    content_pk: UUID
    removed_by_pk: UUID
    reason: str

    @property
    def affected_user_pk(self) -> UUID:
        return self.author_pk


class Ban(BaseDBModel):
    """An account ban."""

    user_pk: UUID
    banned_by_pk: UUID
    reason: str
    is_appealable: bool = True
    expires_at: datetime | None = None  # None means permanent

    @property
    def affected_user_pk(self) -> UUID:
        return self.user_pk


class Suspension(BaseDBModel):
    """A temporary platform-level suspension."""

    user_pk: UUID
    suspended_by_pk: UUID
    reason: str
    ends_at: datetime

    @property
    def affected_user_pk(self) -> UUID:
        return self.user_pk


Subject = ContentRemoval | Ban | Suspension
