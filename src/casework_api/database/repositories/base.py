"""Base repository class for the Casework API."""

from abc import ABC
from abc import abstractmethod
from enum import Enum
from typing import Any
from typing import Generic
from typing import TypeVar
from uuid import UUID

from asyncpg import Record

from casework_api.database.connection import get_db_connection

T = TypeVar("T")

# Written as the SQL expression NOW() by update_from_dict
SQL_NOW = object()


def to_db_value(value: Any) -> Any:
    """Convert a model value into something asyncpg can bind."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, list):
        return [to_db_value(item) for item in value]
    return value


class BaseRepository(ABC, Generic[T]):
    """Base repository class with common database operations."""

    def __init__(self, table_name: str):
        self.table_name = table_name

    @abstractmethod
    def _record_to_model(self, record: Record) -> T:
        """Convert database record to model instance."""

    async def get_by_pk(self, pk: UUID) -> T | None:
        """Get a record by primary key."""
        query = f"SELECT * FROM {self.table_name} WHERE pk = $1"

        async with get_db_connection() as connection:
            record = await connection.fetchrow(query, pk)
            return self._record_to_model(record) if record else None

    async def count(
        self, where_clause: str = "", params: list[Any] | None = None
    ) -> int:
        """Count records with optional where clause."""
        if params is None:
            params = []

        query = f"SELECT COUNT(*) FROM {self.table_name}"
        if where_clause:
            query += f" WHERE {where_clause}"

        async with get_db_connection() as connection:
            result = await connection.fetchval(query, *params)
            return result or 0

    async def create_from_dict(self, data: dict[str, Any]) -> T:
        """Create a new record."""
        columns = list(data.keys())
        placeholders = [f"${i + 1}" for i in range(len(columns))]
        values = [to_db_value(value) for value in data.values()]

        query = f"""
            INSERT INTO {self.table_name} ({", ".join(columns)})
            VALUES ({", ".join(placeholders)})
            RETURNING *
        """

        async with get_db_connection() as connection:
            record = await connection.fetchrow(query, *values)
            if record is None:
                raise ValueError(f"Failed to create record in {self.table_name}")
            return self._record_to_model(record)

    async def update_from_dict(self, pk: UUID, data: dict[str, Any]) -> T | None:
        """Update a record by primary key.

        Values that are ``SQL_NOW`` become ``NOW()``; ``updated_at`` defaults
        to it unless the caller supplies a value.
        """
        if not data:
            return await self.get_by_pk(pk)

        data = dict(data)
        data.setdefault("updated_at", SQL_NOW)

        set_clauses = []
        values = []
        param_count = 1

        for column, value in data.items():
            if value is SQL_NOW:
                set_clauses.append(f"{column} = NOW()")
            else:
                set_clauses.append(f"{column} = ${param_count}")
                values.append(to_db_value(value))
                param_count += 1

        values.append(pk)  # Add PK for WHERE clause

        query = f"""
            UPDATE {self.table_name}
            SET {", ".join(set_clauses)}
            WHERE pk = ${param_count}
            RETURNING *
        """

        async with get_db_connection() as connection:
            record = await connection.fetchrow(query, *values)
            return self._record_to_model(record) if record else None
