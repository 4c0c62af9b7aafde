"""Domain errors raised by the data-access layer."""
from __future__ import annotations


class RelationHubError(Exception):
    """Base error for data-access operations."""

    code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class NotFoundError(RelationHubError):
    """Raised when a row does not exist or belongs to another user."""

    code = "RESOURCE_NOT_FOUND"

    def __init__(self, resource: str, identifier: object):
        super().__init__(f"{resource} with ID {identifier} not found")
        self.resource = resource
        self.identifier = identifier


class ConflictError(RelationHubError):
    """Raised when a write violates a unique or foreign key constraint."""

    code = "CONFLICT"


class ValidationError(RelationHubError):
    """Raised when query arguments are invalid."""

    code = "VALIDATION_ERROR"
