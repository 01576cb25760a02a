"""Service layer for the Casework API."""

from casework_api.services.case_errors import CaseError
from casework_api.services.case_service import CaseService

__all__ = [
    "CaseError",
    "CaseService",
]
