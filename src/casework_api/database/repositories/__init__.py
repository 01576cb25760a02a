"""Database repositories for the Casework API."""

from casework_api.database.repositories.base import BaseRepository
from casework_api.database.repositories.case import CaseRepository
from casework_api.database.repositories.subject import BanRepository
from casework_api.database.repositories.subject import ContentRemovalRepository
from casework_api.database.repositories.subject import SuspensionRepository
from casework_api.database.repositories.subject import get_subject_repositories
from casework_api.database.repositories.user import UserRepository

__all__ = [
    "BanRepository",
    "BaseRepository",
    "CaseRepository",
    "ContentRemovalRepository",
    "SuspensionRepository",
    "UserRepository",
    "get_subject_repositories",
]
