"""Case repository for the Casework API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from asyncpg import Record

from casework_api.database.connection import get_db_connection
from casework_api.database.models.base import CaseStatus
from casework_api.database.models.case import OPEN_STATUSES
from casework_api.database.models.case import Case
from casework_api.database.models.case import CaseFilter
from casework_api.database.models.case import CaseStats
from casework_api.database.models.case import NewCase
from casework_api.database.models.case import SubjectReference
from casework_api.database.repositories.base import BaseRepository
from casework_api.database.repositories.base import to_db_value

_OPEN_STATUS_VALUES = sorted(status.value for status in OPEN_STATUSES)


class CaseRepository(BaseRepository[Case]):
    """Repository for case operations."""

    def __init__(self):
        super().__init__("cases")

    def _record_to_model(self, record: Record) -> Case:
        """Convert database record to Case model."""
        return Case.model_validate(dict(record))

    async def create_case(self, new_case: NewCase) -> Case:
        """Insert a validated case."""
        return await self.create_from_dict(new_case.model_dump())

    async def update_case(self, case_pk: UUID, changes: dict[str, Any]) -> Case | None:
        """Persist the changed columns of a case."""
        return await self.update_from_dict(case_pk, changes)

    async def get_open_case_for_subject(
        self, reference: SubjectReference
    ) -> Case | None:
        """Get the open case referencing a moderation action, if any."""
        query = f"""
            SELECT * FROM cases
            WHERE {reference.column} = $1 AND status = ANY($2::text[])
            ORDER BY created_at DESC
            LIMIT 1
        """

        async with get_db_connection() as connection:
            record = await connection.fetchrow(
                query, reference.target_pk, _OPEN_STATUS_VALUES
            )
            return self._record_to_model(record) if record else None

    async def count_open_cases_for_user(self, user_pk: UUID) -> int:
        """Count pending and in-review cases submitted by a user."""
        return await self.count(
            "submitted_by_pk = $1 AND status = ANY($2::text[])",
            [user_pk, _OPEN_STATUS_VALUES],
        )

    async def get_user_cases(
        self,
        user_pk: UUID,
        status: CaseStatus | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Case]:
        """Get cases submitted by a user, newest first."""
        where_clause, params = self._build_where_clause(
            CaseFilter(
                submitted_by_pk=user_pk,
                statuses=[status] if status else None,
            )
        )
        return await self._fetch_page(where_clause, params, limit, offset)

    async def count_user_cases(
        self, user_pk: UUID, status: CaseStatus | None = None
    ) -> int:
        """Count cases submitted by a user."""
        where_clause, params = self._build_where_clause(
            CaseFilter(
                submitted_by_pk=user_pk,
                statuses=[status] if status else None,
            )
        )
        return await self.count(where_clause, params)

    async def search_cases(
        self,
        filters: CaseFilter,
        now: datetime,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Case]:
        """Get the staff queue; oldest deadline first."""
        where_clause, params = self._build_where_clause(filters, now)
        return await self._fetch_page(
            where_clause,
            params,
            limit,
            offset,
            order_clause="ORDER BY expected_resolution_at ASC, created_at ASC",
        )

    async def count_cases(self, filters: CaseFilter, now: datetime) -> int:
        """Count cases matching the staff queue filters."""
        where_clause, params = self._build_where_clause(filters, now)
        return await self.count(where_clause, params)

    async def get_case_statistics(self, now: datetime) -> CaseStats:
        """Get case statistics for staff."""
        stats_query = """
            SELECT
                COUNT(*) FILTER (WHERE status = 'pending') as total_pending,
                COUNT(*) FILTER (WHERE status = 'in_review') as total_in_review,
                COUNT(*) FILTER (WHERE status = 'resolved') as total_resolved,
                COUNT(*) FILTER (WHERE status = 'dismissed') as total_dismissed,
                COUNT(*) FILTER (
                    WHERE status = ANY($1::text[]) AND expected_resolution_at < $2
                ) as total_overdue,
                AVG(EXTRACT(EPOCH FROM (resolved_at - created_at)) / 3600)
                    FILTER (WHERE resolved_at IS NOT NULL) as avg_resolution_hours
            FROM cases
        """

        cases_by_kind_query = """
            SELECT subject_kind, COUNT(*) as count
            FROM cases
            GROUP BY subject_kind
            ORDER BY count DESC
        """

        async with get_db_connection() as connection:
            stats_record = await connection.fetchrow(
                stats_query, _OPEN_STATUS_VALUES, now
            )
            kind_records = await connection.fetch(cases_by_kind_query)

        average = stats_record["avg_resolution_hours"] if stats_record else None

        return CaseStats(
            total_pending=stats_record["total_pending"] if stats_record else 0,
            total_in_review=stats_record["total_in_review"] if stats_record else 0,
            total_resolved=stats_record["total_resolved"] if stats_record else 0,
            total_dismissed=stats_record["total_dismissed"] if stats_record else 0,
            total_overdue=stats_record["total_overdue"] if stats_record else 0,
            average_resolution_hours=float(average) if average is not None else None,
            cases_by_kind={
                record["subject_kind"]: record["count"] for record in kind_records
            },
        )

    async def _fetch_page(
        self,
        where_clause: str,
        params: list[Any],
        limit: int,
        offset: int,
        order_clause: str = "ORDER BY created_at DESC",
    ) -> list[Case]:
        param_count = len(params) + 1
        query = f"""
            SELECT * FROM cases
            {f"WHERE {where_clause}" if where_clause else ""}
            {order_clause}
            LIMIT ${param_count} OFFSET ${param_count + 1}
        """

        async with get_db_connection() as connection:
            records = await connection.fetch(query, *params, limit, offset)
            return [self._record_to_model(record) for record in records]

    def _build_where_clause(
        self, filters: CaseFilter, now: datetime | None = None
    ) -> tuple[str, list[Any]]:
        """Translate queue filters into a WHERE clause and its parameters."""
        where_conditions: list[str] = []
        params: list[Any] = []

        def add(condition: str, value: Any) -> None:
            params.append(to_db_value(value))
            where_conditions.append(condition.format(p=f"${len(params)}"))

        if filters.statuses:
            add("status = ANY({p}::text[])", filters.statuses)
        if filters.subject_kind:
            add("subject_kind = {p}", filters.subject_kind)
        if filters.submitted_by_pk:
            add("submitted_by_pk = {p}", filters.submitted_by_pk)
        if filters.assigned_reviewer_pk:
            add("assigned_reviewer_pk = {p}", filters.assigned_reviewer_pk)
        if filters.created_from:
            add("created_at >= {p}", filters.created_from)
        if filters.created_to:
            add("created_at <= {p}", filters.created_to)
        if filters.overdue_only and now is not None:
            add("status = ANY({p}::text[])", _OPEN_STATUS_VALUES)
            add("expected_resolution_at < {p}", now)

        return " AND ".join(where_conditions), params
