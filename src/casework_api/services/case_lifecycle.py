"""Lifecycle rules for moderation cases.

Everything in this module is a pure function of the loaded rows, the acting
identity and the clock: it returns the new state or raises a ``CaseError``
and never touches the database.
"""

from datetime import datetime
from datetime import timedelta
from typing import Any

from casework_api.database.models.base import STAFF_ROLES
from casework_api.database.models.base import CaseStatus
from casework_api.database.models.base import SubjectKind
from casework_api.database.models.base import UserRole
from casework_api.database.models.case import SUBJECT_COLUMNS
from casework_api.database.models.case import TERMINAL_STATUSES
from casework_api.database.models.case import Case
from casework_api.database.models.case import CaseCreate
from casework_api.database.models.case import CaseUpdate
from casework_api.database.models.case import NewCase
from casework_api.database.models.case import SubjectReference
from casework_api.database.models.subject import Ban
from casework_api.database.models.subject import Subject
from casework_api.database.models.user import Actor
from casework_api.services.case_errors import DuplicateSubmission
from casework_api.services.case_errors import IllegalTransition
from casework_api.services.case_errors import InvalidRequestShape
from casework_api.services.case_errors import MissingResolution
from casework_api.services.case_errors import NotEligible
from casework_api.services.case_errors import OpenCaseLimitReached
from casework_api.services.case_errors import ReferenceNotFound
from casework_api.services.case_errors import SubmissionWindowClosed

LIFECYCLE: dict[CaseStatus, frozenset[CaseStatus]] = {
    CaseStatus.PENDING: frozenset(
        {CaseStatus.IN_REVIEW, CaseStatus.RESOLVED, CaseStatus.DISMISSED}
    ),
    CaseStatus.IN_REVIEW: frozenset({CaseStatus.RESOLVED, CaseStatus.DISMISSED}),
    CaseStatus.RESOLVED: frozenset(),
    CaseStatus.DISMISSED: frozenset(),
}

CONTENT_REMOVAL_RESOLUTION_OFFSET = timedelta(hours=60)
BAN_RESOLUTION_OFFSET = timedelta(hours=60)
SUSPENSION_RESOLUTION_OFFSET = timedelta(hours=144)

EXPECTED_RESOLUTION_OFFSETS: dict[SubjectKind, timedelta] = {
    SubjectKind.CONTENT_REMOVAL: CONTENT_REMOVAL_RESOLUTION_OFFSET,
    SubjectKind.BAN: BAN_RESOLUTION_OFFSET,
    SubjectKind.SUSPENSION: SUSPENSION_RESOLUTION_OFFSET,
}

APPEAL_WINDOW = timedelta(days=30)
MAX_OPEN_CASES_PER_USER = 5

# Columns apply_case_update may change
MUTABLE_FIELDS = (
    "status",
    "assigned_reviewer_pk",
    "resolution_note",
    "decision",
    "justification",
    "evidence",
    "resolved_at",
    "updated_at",
)


def can_transition(
    actor_role: UserRole, current_status: CaseStatus, requested_status: CaseStatus
) -> bool:
    """Whether an actor with this role may move a case between two statuses."""
    if actor_role not in STAFF_ROLES:
        return False
    return requested_status in LIFECYCLE[current_status]


def resolve_subject_reference(request: CaseCreate) -> SubjectReference:
    """Collapse the request's target fields into a single subject reference."""
    populated = [
        SubjectReference(kind=kind, target_pk=getattr(request, column))
        for kind, column in SUBJECT_COLUMNS.items()
        if getattr(request, column) is not None
    ]

    if not populated:
        raise InvalidRequestShape(
            "One of content_removal_pk, ban_pk or suspension_pk must be specified"
        )
    if len(populated) > 1:
        raise InvalidRequestShape("Only one moderation action can be appealed per case")

    return populated[0]


def build_new_case(
    request: CaseCreate,
    reference: SubjectReference,
    actor: Actor,
    subject: Subject | None,
    open_case_for_subject: Case | None,
    open_cases_for_actor: int,
    now: datetime,
) -> NewCase:
    """Check that the actor may open a case and build the row to insert."""
    if subject is None:
        raise ReferenceNotFound(
            f"{reference.kind.value.replace('_', ' ').capitalize()} not found"
        )

    if subject.affected_user_pk != actor.pk:
        raise NotEligible(
            "You can only appeal moderation actions taken against your own account"
        )

    if isinstance(subject, Ban) and not subject.is_appealable:
        raise NotEligible("This ban is not appealable")

    if now - subject.created_at > APPEAL_WINDOW:
        raise SubmissionWindowClosed(
            f"Appeal window has closed ({APPEAL_WINDOW.days} days from the "
            "moderation action)"
        )

    if open_case_for_subject is not None:
        raise DuplicateSubmission(
            f"Case {open_case_for_subject.pk} is already open for this "
            "moderation action"
        )

    if open_cases_for_actor >= MAX_OPEN_CASES_PER_USER:
        raise OpenCaseLimitReached(
            f"Maximum of {MAX_OPEN_CASES_PER_USER} open cases reached. "
            "Please wait for existing cases to be resolved."
        )

    return NewCase(
        submitted_by_pk=actor.pk,
        subject_kind=reference.kind,
        **{reference.column: reference.target_pk},
        justification=request.justification,
        evidence=request.evidence,
        status=CaseStatus.PENDING,
        expected_resolution_at=now + EXPECTED_RESOLUTION_OFFSETS[reference.kind],
        created_at=now,
        updated_at=now,
    )


def apply_case_update(
    case: Case, actor: Actor, changes: CaseUpdate, now: datetime
) -> Case:
    """Apply a requested update to a case.

    Returns the case unchanged when the request changes nothing.
    """
    staff_fields = changes.staff_fields()
    submitter_fields = changes.submitter_fields()

    if not staff_fields and not submitter_fields:
        return case

    if staff_fields and not actor.is_staff:
        raise NotEligible(
            "Only moderators and administrators can change the status, "
            "reviewer or resolution of a case"
        )

    if submitter_fields and actor.pk != case.submitted_by_pk:
        raise NotEligible("Only the submitter can edit the justification or evidence")

    if case.is_terminal:
        raise IllegalTransition(
            f"Case is {case.status.value}; closed cases cannot be changed"
        )

    if submitter_fields and case.status != CaseStatus.PENDING:
        raise IllegalTransition(
            "Justification and evidence can only be edited while the case is pending"
        )

    updates: dict[str, Any] = {}
    target_status = changes.status

    if (
        changes.assigned_reviewer_pk is not None
        and changes.assigned_reviewer_pk != case.assigned_reviewer_pk
    ):
        updates["assigned_reviewer_pk"] = changes.assigned_reviewer_pk
        if target_status is None and case.status == CaseStatus.PENDING:
            target_status = CaseStatus.IN_REVIEW

    if target_status is not None and target_status != case.status:
        if not can_transition(actor.role, case.status, target_status):
            raise IllegalTransition(
                f"Cannot move case from {case.status.value} to {target_status.value}"
            )
        updates["status"] = target_status

    if updates.get("status") in TERMINAL_STATUSES:
        if not changes.resolution_note or not changes.resolution_note.strip():
            raise MissingResolution(
                "A resolution note is required to resolve or dismiss a case"
            )
        updates["resolution_note"] = changes.resolution_note
        if changes.decision is not None:
            updates["decision"] = changes.decision
        updates["resolved_at"] = now
    elif changes.resolution_note is not None or changes.decision is not None:
        raise InvalidRequestShape(
            "A resolution note or decision can only accompany a resolved or "
            "dismissed status"
        )

    for field in submitter_fields:
        if getattr(changes, field) != getattr(case, field):
            updates[field] = getattr(changes, field)

    if not updates:
        return case

    updates["updated_at"] = now
    return case.model_copy(update=updates)


def changed_fields(original: Case, updated: Case) -> dict[str, Any]:
    """Columns that differ between two versions of a case."""
    return {
        field: getattr(updated, field)
        for field in MUTABLE_FIELDS
        if getattr(updated, field) != getattr(original, field)
    }
