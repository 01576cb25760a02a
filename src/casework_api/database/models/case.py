"""Case models for the Casework API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from casework_api.database.models.base import BaseDBModel
from casework_api.database.models.base import CaseStatus
from casework_api.database.models.base import SubjectKind

OPEN_STATUSES = frozenset({CaseStatus.PENDING, CaseStatus.IN_REVIEW})
TERMINAL_STATUSES = frozenset({CaseStatus.RESOLVED, CaseStatus.DISMISSED})

# Column holding the target pk for each subject kind
SUBJECT_COLUMNS: dict[SubjectKind, str] = {
    SubjectKind.CONTENT_REMOVAL: "content_removal_pk",
    SubjectKind.BAN: "ban_pk",
    SubjectKind.SUSPENSION: "suspension_pk",
}


class SubjectReference(BaseModel):
    """Points at exactly one moderation action."""

    kind: SubjectKind
    target_pk: UUID

    model_config = ConfigDict(frozen=True)

    @property
    def column(self) -> str:
        return SUBJECT_COLUMNS[self.kind]


class Case(BaseDBModel):
    """Case database model."""

    submitted_by_pk: UUID
    subject_kind: SubjectKind
    content_removal_pk: UUID | None = None
    ban_pk: UUID | None = None
    suspension_pk: UUID | None = None
    justification: str
    evidence: str | None = None
    status: CaseStatus = CaseStatus.PENDING

    # Review details
    assigned_reviewer_pk: UUID | None = None
    resolution_note: str | None = None
    decision: str | None = None
    expected_resolution_at: datetime
    resolved_at: datetime | None = None

    @property
    def subject(self) -> SubjectReference:
        target_pk = getattr(self, SUBJECT_COLUMNS[self.subject_kind])
        return SubjectReference(kind=self.subject_kind, target_pk=target_pk)

    @property
    def is_open(self) -> bool:
        return self.status in OPEN_STATUSES

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES


class CaseCreate(BaseModel):
    """Case submission request.

    The three target fields form a tagged union on the wire; exactly one of
    them must be set.
    """

    content_removal_pk: UUID | None = None
    ban_pk: UUID | None = None
    suspension_pk: UUID | None = None
    justification: str = Field(..., min_length=10, max_length=2000)
    evidence: str | None = Field(None, max_length=2000)

    model_config = ConfigDict(from_attributes=True)


class NewCase(BaseModel):
    """Validated row ready to be inserted."""

    submitted_by_pk: UUID
    subject_kind: SubjectKind
    content_removal_pk: UUID | None = None
    ban_pk: UUID | None = None
    suspension_pk: UUID | None = None
    justification: str
    evidence: str | None = None
    status: CaseStatus = CaseStatus.PENDING
    expected_resolution_at: datetime
    created_at: datetime
    updated_at: datetime


class CaseUpdate(BaseModel):
    """Case update request. Omitted fields are left untouched."""

    # Staff fields
    status: CaseStatus | None = None
    assigned_reviewer_pk: UUID | None = None
    resolution_note: str | None = Field(None, max_length=2000)
    decision: str | None = Field(None, max_length=200)

    # Submitter fields
    justification: str | None = Field(None, min_length=10, max_length=2000)
    evidence: str | None = Field(None, max_length=2000)

    model_config = ConfigDict(from_attributes=True)

    def staff_fields(self) -> set[str]:
        """Staff-only fields present in the request."""
        return {
            name
            for name in (
                "status",
                "assigned_reviewer_pk",
                "resolution_note",
                "decision",
            )
            if getattr(self, name) is not None
        }

    def submitter_fields(self) -> set[str]:
        """Submitter-only fields present in the request."""
        return {
            name
            for name in ("justification", "evidence")
            if getattr(self, name) is not None
        }


class CaseFilter(BaseModel):
    """Filters for the staff case queue."""

    statuses: list[CaseStatus] | None = None
    subject_kind: SubjectKind | None = None
    submitted_by_pk: UUID | None = None
    assigned_reviewer_pk: UUID | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None
    overdue_only: bool = False


class CaseResponse(BaseModel):
    """Paginated case response."""

    cases: list[Case]
    total_count: int
    page: int
    page_size: int
    has_next: bool
    has_previous: bool


class CaseStats(BaseModel):
    """Case statistics for staff."""

    total_pending: int
    total_in_review: int
    total_resolved: int
    total_dismissed: int
    total_overdue: int
    average_resolution_hours: float | None
    cases_by_kind: dict[str, int]
