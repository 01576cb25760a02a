"""Case service for the Casework API."""

import logging

from datetime import UTC
from datetime import datetime
from uuid import UUID

from casework_api.database.models.base import CaseStatus
from casework_api.database.models.case import Case
from casework_api.database.models.case import CaseCreate
from casework_api.database.models.case import CaseFilter
from casework_api.database.models.case import CaseResponse
from casework_api.database.models.case import CaseStats
from casework_api.database.models.case import CaseUpdate
from casework_api.database.models.user import Actor
from casework_api.database.repositories.case import CaseRepository
from casework_api.database.repositories.subject import get_subject_repositories
from casework_api.database.repositories.user import UserRepository
from casework_api.services.case_errors import CaseError
from casework_api.services.case_errors import NotEligible
from casework_api.services.case_errors import ReferenceNotFound
from casework_api.services.case_lifecycle import apply_case_update
from casework_api.services.case_lifecycle import build_new_case
from casework_api.services.case_lifecycle import changed_fields
from casework_api.services.case_lifecycle import resolve_subject_reference

logger = logging.getLogger(__name__)


class CaseService:
    """Service for submitting and reviewing cases."""

    def __init__(self):
        """Initialize the case service."""
        self.case_repository = CaseRepository()
        self.user_repository = UserRepository()
        self.subject_repositories = get_subject_repositories()

    async def submit_case(self, actor: Actor, request: CaseCreate) -> Case:
        """
        Open a new case against a moderation action.

        The duplicate check is a read immediately before the insert, so two
        concurrent submissions for the same action can both succeed.

        Raises:
            CaseError: if the request is rejected; nothing is written.
        """
        try:
            reference = resolve_subject_reference(request)
            subject = await self.subject_repositories[reference.kind].get_by_pk(
                reference.target_pk
            )
            open_case = await self.case_repository.get_open_case_for_subject(
                reference
            )
            open_count = await self.case_repository.count_open_cases_for_user(
                actor.pk
            )

            new_case = build_new_case(
                request,
                reference,
                actor,
                subject,
                open_case,
                open_count,
                datetime.now(UTC),
            )
        except CaseError as e:
            logger.warning(f"Case submission by user {actor.pk} rejected: {e.message}")
            raise

        case = await self.case_repository.create_case(new_case)
        logger.info(
            f"Case {case.pk} submitted by user {actor.pk} "
            f"for {reference.kind.value} {reference.target_pk}"
        )
        return case

    async def update_case(
        self, case_pk: UUID, actor: Actor, changes: CaseUpdate
    ) -> Case:
        """
        Apply a status transition, reviewer assignment or submitter edit.

        Returns the stored case; a request that changes nothing is not written.
        """
        case = await self._get_case_or_raise(case_pk)

        try:
            updated = apply_case_update(case, actor, changes, datetime.now(UTC))
            changes_to_save = changed_fields(case, updated)

            if "assigned_reviewer_pk" in changes_to_save:
                await self._check_reviewer(changes_to_save["assigned_reviewer_pk"])
        except CaseError as e:
            logger.warning(
                f"Update of case {case_pk} by user {actor.pk} rejected: {e.message}"
            )
            raise

        if not changes_to_save:
            return case

        saved = await self.case_repository.update_case(case_pk, changes_to_save)
        if saved is None:
            raise ReferenceNotFound("Case not found")

        if saved.status != case.status:
            logger.info(
                f"Case {case_pk} moved from {case.status.value} to "
                f"{saved.status.value} by user {actor.pk}"
            )
        else:
            logger.info(f"Case {case_pk} updated by user {actor.pk}")

        return saved

    async def get_case(self, case_pk: UUID, actor: Actor) -> Case:
        """Get a case visible to its submitter and to staff."""
        case = await self._get_case_or_raise(case_pk)

        if not actor.is_staff and case.submitted_by_pk != actor.pk:
            raise NotEligible("You can only view your own cases")

        return case

    async def get_my_cases(
        self,
        actor: Actor,
        status: CaseStatus | None = None,
        page: int = 1,
        page_size: int = 20,
    ) -> CaseResponse:
        """Get paginated cases submitted by the actor."""
        offset = (page - 1) * page_size

        cases = await self.case_repository.get_user_cases(
            actor.pk, status, page_size, offset
        )
        total_count = await self.case_repository.count_user_cases(actor.pk, status)

        return CaseResponse(
            cases=cases,
            total_count=total_count,
            page=page,
            page_size=page_size,
            has_next=offset + page_size < total_count,
            has_previous=page > 1,
        )

    async def get_case_queue(
        self,
        filters: CaseFilter,
        page: int = 1,
        page_size: int = 50,
    ) -> CaseResponse:
        """Get the review queue for staff."""
        offset = (page - 1) * page_size
        now = datetime.now(UTC)

        cases = await self.case_repository.search_cases(
            filters, now, limit=page_size, offset=offset
        )
        total_count = await self.case_repository.count_cases(filters, now)

        return CaseResponse(
            cases=cases,
            total_count=total_count,
            page=page,
            page_size=page_size,
            has_next=offset + page_size < total_count,
            has_previous=page > 1,
        )

    async def get_case_statistics(self) -> CaseStats:
        """Get case statistics for staff."""
        return await self.case_repository.get_case_statistics(datetime.now(UTC))

    async def _get_case_or_raise(self, case_pk: UUID) -> Case:
        case = await self.case_repository.get_by_pk(case_pk)
        if case is None:
            raise ReferenceNotFound("Case not found")
        return case

    async def _check_reviewer(self, reviewer_pk: UUID) -> None:
        """Assigned reviewers must be existing staff accounts."""
        reviewer = await self.user_repository.get_by_pk(reviewer_pk)
        if reviewer is None:
            raise ReferenceNotFound("Assigned reviewer not found")
        if not reviewer.is_staff:
            raise NotEligible("Assigned reviewer must be a moderator or administrator")
