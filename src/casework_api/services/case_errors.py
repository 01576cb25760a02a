"""Typed failures raised by the case validators."""


class CaseError(Exception):
    """Base class for rejected case requests.

    Raised before any write, so the stored case is never partially changed.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestShape(CaseError):
    """The request is structurally wrong, e.g. zero or several subjects."""


class ReferenceNotFound(CaseError):
    """A referenced case, moderation action or user does not exist."""


class NotEligible(CaseError):
    """The actor may not perform this operation."""


class DuplicateSubmission(CaseError):
    """An open case already exists for the same moderation action."""


class IllegalTransition(CaseError):
    """The requested status is unreachable from the current status."""


class MissingResolution(CaseError):
    """A terminal status was requested without a resolution note."""


class SubmissionWindowClosed(CaseError):
    """The moderation action is too old to be appealed."""


class OpenCaseLimitReached(CaseError):
    """The actor already has the maximum number of open cases."""
