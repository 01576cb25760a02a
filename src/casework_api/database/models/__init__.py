"""Database models for the Casework API."""

from casework_api.database.models.base import BaseDBModel
from casework_api.database.models.base import CaseStatus
from casework_api.database.models.base import ContentType
from casework_api.database.models.base import SubjectKind
from casework_api.database.models.base import UserRole
from casework_api.database.models.case import Case
from casework_api.database.models.case import CaseCreate
from casework_api.database.models.case import CaseFilter
from casework_api.database.models.case import CaseResponse
from casework_api.database.models.case import CaseStats
from casework_api.database.models.case import CaseUpdate
from casework_api.database.models.case import NewCase
from casework_api.database.models.case import SubjectReference
from casework_api.database.models.subject import Ban
from casework_api.database.models.subject import ContentRemoval
from casework_api.database.models.subject import Suspension
from casework_api.database.models.user import Actor
from casework_api.database.models.user import User

__all__ = [
    "Actor",
    "Ban",
    "BaseDBModel",
    "Case",
    "CaseCreate",
    "CaseFilter",
    "CaseResponse",
    "CaseStats",
    "CaseStatus",
    "CaseUpdate",
    "ContentRemoval",
    "ContentType",
    "NewCase",
    "SubjectKind",
    "SubjectReference",
    "Suspension",
    "User",
    "UserRole",
]
