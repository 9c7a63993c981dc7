"""Domain error taxonomy."""

from uuid import UUID


class TrackerError(Exception):
    """Base class for errors surfaced to API callers."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TrackerError):
    """A required field is missing or invalid."""


class NotFoundError(TrackerError):
    """The record does not exist or is not owned by the caller."""


class ConflictError(TrackerError):
    """A record with the same identity already exists."""

    def __init__(self, message: str, existing_id: UUID | None = None) -> None:
        super().__init__(message)
        self.existing_id = existing_id


class UpstreamAnalysisError(TrackerError):
    """The AI provider failed or returned an unusable response."""
