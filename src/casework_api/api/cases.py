"""Case endpoints for the Casework API."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException
from fastapi import Query
from fastapi import status

from casework_api.auth.dependencies import get_current_user
from casework_api.auth.dependencies import require_staff
from casework_api.database.models.base import CaseStatus
from casework_api.database.models.base import SubjectKind
from casework_api.database.models.case import Case
from casework_api.database.models.case import CaseCreate
from casework_api.database.models.case import CaseFilter
from casework_api.database.models.case import CaseResponse
from casework_api.database.models.case import CaseStats
from casework_api.database.models.case import CaseUpdate
from casework_api.database.models.user import User
from casework_api.services.case_errors import CaseError
from casework_api.services.case_errors import DuplicateSubmission
from casework_api.services.case_errors import IllegalTransition
from casework_api.services.case_errors import InvalidRequestShape
from casework_api.services.case_errors import MissingResolution
from casework_api.services.case_errors import NotEligible
from casework_api.services.case_errors import OpenCaseLimitReached
from casework_api.services.case_errors import ReferenceNotFound
from casework_api.services.case_errors import SubmissionWindowClosed
from casework_api.services.case_service import CaseService

router = APIRouter(prefix="/cases", tags=["cases"])

CASE_ERROR_STATUS: dict[type[CaseError], int] = {
    InvalidRequestShape: status.HTTP_400_BAD_REQUEST,
    MissingResolution: status.HTTP_400_BAD_REQUEST,
    SubmissionWindowClosed: status.HTTP_400_BAD_REQUEST,
    OpenCaseLimitReached: status.HTTP_400_BAD_REQUEST,
    NotEligible: status.HTTP_403_FORBIDDEN,
    ReferenceNotFound: status.HTTP_404_NOT_FOUND,
    DuplicateSubmission: status.HTTP_409_CONFLICT,
    IllegalTransition: status.HTTP_409_CONFLICT,
}


def get_case_service() -> CaseService:
    """Get case service instance."""
    return CaseService()


def to_http_exception(error: CaseError) -> HTTPException:
    """Map a rejected case request to its HTTP status."""
    return HTTPException(
        status_code=CASE_ERROR_STATUS.get(
            type(error), status.HTTP_400_BAD_REQUEST
        ),
        detail=error.message,
    )


# Member-facing endpoints
@router.post("/", response_model=Case, status_code=status.HTTP_201_CREATED)
async def submit_case(
    case_data: CaseCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    case_service: Annotated[CaseService, Depends(get_case_service)],
):
    """Open a case against a moderation action."""
    try:
        return await case_service.submit_case(current_user.as_actor(), case_data)
    except CaseError as e:
        raise to_http_exception(e) from e


@router.get("/mine", response_model=CaseResponse)
async def get_my_cases(
    current_user: Annotated[User, Depends(get_current_user)],
    case_service: Annotated[CaseService, Depends(get_case_service)],
    status: Annotated[
        CaseStatus | None, Query(description="Filter by case status")
    ] = None,
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    page_size: Annotated[int, Query(ge=1, le=100, description="Items per page")] = 20,
):
    """Get current user's cases."""
    return await case_service.get_my_cases(
        current_user.as_actor(), status, page, page_size
    )


# Staff endpoints
@router.get("/queue", response_model=CaseResponse)
async def get_case_queue(
    current_user: Annotated[User, Depends(require_staff)],
    case_service: Annotated[CaseService, Depends(get_case_service)],
    status: Annotated[
        list[CaseStatus] | None, Query(description="Filter by one or more statuses")
    ] = None,
    subject_kind: Annotated[
        SubjectKind | None, Query(description="Filter by moderation action kind")
    ] = None,
    submitted_by_pk: Annotated[UUID | None, Query()] = None,
    assigned_reviewer_pk: Annotated[UUID | None, Query()] = None,
    created_from: Annotated[datetime | None, Query()] = None,
    created_to: Annotated[datetime | None, Query()] = None,
    overdue_only: Annotated[
        bool, Query(description="Only open cases past their expected resolution")
    ] = False,
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    page_size: Annotated[int, Query(ge=1, le=100, description="Items per page")] = 50,
):
    """Get the review queue for moderators and administrators."""
    filters = CaseFilter(
        statuses=status,
        subject_kind=subject_kind,
        submitted_by_pk=submitted_by_pk,
        assigned_reviewer_pk=assigned_reviewer_pk,
        created_from=created_from,
        created_to=created_to,
        overdue_only=overdue_only,
    )
    return await case_service.get_case_queue(filters, page, page_size)


@router.get("/stats", response_model=CaseStats)
async def get_case_statistics(
    current_user: Annotated[User, Depends(require_staff)],
    case_service: Annotated[CaseService, Depends(get_case_service)],
):
    """Get case statistics."""
    return await case_service.get_case_statistics()


# Shared endpoints
@router.get("/{case_pk}", response_model=Case)
async def get_case(
    case_pk: UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    case_service: Annotated[CaseService, Depends(get_case_service)],
):
    """Get a case; submitters see their own, staff see all."""
    try:
        return await case_service.get_case(case_pk, current_user.as_actor())
    except CaseError as e:
        raise to_http_exception(e) from e


@router.patch("/{case_pk}", response_model=Case)
async def update_case(
    case_pk: UUID,
    case_update: CaseUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    case_service: Annotated[CaseService, Depends(get_case_service)],
):
    """Transition, assign or edit a case."""
    try:
        return await case_service.update_case(
            case_pk, current_user.as_actor(), case_update
        )
    except CaseError as e:
        raise to_http_exception(e) from e
