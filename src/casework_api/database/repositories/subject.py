"""Repositories for content removals, bans and suspensions."""

from asyncpg import Record

from casework_api.database.models.base import SubjectKind
from casework_api.database.models.subject import Ban
from casework_api.database.models.subject import ContentRemoval
from casework_api.database.models.subject import Suspension
from casework_api.database.repositories.base import BaseRepository


class ContentRemovalRepository(BaseRepository[ContentRemoval]):
    """Repository for content removal records."""

    def __init__(self):
        super().__init__("content_removals")

    def _record_to_model(self, record: Record) -> ContentRemoval:
        return ContentRemoval.model_validate(dict(record))


class BanRepository(BaseRepository[Ban]):
    """Repository for ban records."""

    def __init__(self):
        super().__init__("bans")

    def _record_to_model(self, record: Record) -> Ban:
        return Ban.model_validate(dict(record))


class SuspensionRepository(BaseRepository[Suspension]):
    """Repository for suspension records."""

    def __init__(self):
        super().__init__("suspensions")

    def _record_to_model(self, record: Record) -> Suspension:
        return Suspension.model_validate(dict(record))


def get_subject_repositories() -> dict[SubjectKind, BaseRepository]:
    """One repository per subject kind."""
    return {
        SubjectKind.CONTENT_REMOVAL: ContentRemovalRepository(),
        SubjectKind.BAN: BanRepository(),
        SubjectKind.SUSPENSION: SuspensionRepository(),
    }
