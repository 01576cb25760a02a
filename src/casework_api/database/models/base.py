"""Base models and types for the Casework API database."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel
from pydantic import ConfigDict


class UserRole(str, Enum):
    """User role enumeration."""

    MEMBER = "member"
    MODERATOR = "moderator"
    ADMIN = "admin"


STAFF_ROLES = frozenset({UserRole.MODERATOR, UserRole.ADMIN})


class CaseStatus(str, Enum):
    """Case lifecycle status enumeration."""

    PENDING = "pending"
    IN_REVIEW = "in_review"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


class SubjectKind(str, Enum):
    """Kind of moderation action a case is opened against."""

    CONTENT_REMOVAL = "content_removal"
    BAN = "ban"
    SUSPENSION = "suspension"


class ContentType(str, Enum):
    """Content type enumeration."""

    TOPIC = "topic"
    POST = "post"
    REPLY = "reply"


class BaseDBModel(BaseModel):
    """Base model for database entities."""

    pk: UUID
    created_at: datetime
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
