"""Custom exception classes for the Starter API.

Includes:
- Base exception carrying status code and error label
- Access Object failure kinds (InvalidArgument, NotFound, Conflict, Unavailable)

Access Objects raise these; route handlers and the app-level exception
handlers are the only places that turn them into HTTP responses.
"""

from datetime import UTC, datetime
from typing import Any


# Error labels sent in the ``error`` field of every error body
BAD_REQUEST = "Bad Request"
NOT_FOUND = "Not Found"
INTERNAL_ERROR = "Internal Server Error"


class StarterAPIException(Exception):
    """Base exception for all Starter API errors."""

    def __init__(
        self, detail: str, status_code: int = 500, error_code: str = INTERNAL_ERROR
    ):
        self.detail = detail
        self.status_code = status_code
        self.error_code = error_code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to the shared error-response body."""
        return {
            "error": self.error_code,
            "message": self.detail,
        }


class InvalidArgumentError(StarterAPIException):
    """Raised when input is malformed or a required field is missing."""

    def __init__(self, detail: str):
        super().__init__(detail=detail, status_code=400, error_code=BAD_REQUEST)


class NotFoundError(StarterAPIException):
    """Raised when no record exists for a key."""

    def __init__(self, entity: str, record_id: Any):
        self.entity = entity
        self.record_id = record_id
        super().__init__(
            detail=f"{entity} with id {record_id} not found",
            status_code=404,
            error_code=NOT_FOUND,
        )


class ConflictError(StarterAPIException):
    """Raised when a uniqueness constraint is violated.

    Surfaced as 400: the API has no dedicated 409 path.
    """

    def __init__(self, detail: str, field: str | None = None):
        self.field = field
        super().__init__(detail=detail, status_code=400, error_code=BAD_REQUEST)


class UnavailableError(StarterAPIException):
    """Raised when the record store cannot be reached.

    Not retried here; retry belongs to the store client's own policy.
    """

    def __init__(self, detail: str = "Database unavailable"):
        super().__init__(detail=detail, status_code=500, error_code=INTERNAL_ERROR)


__all__ = [
    "BAD_REQUEST",
    "INTERNAL_ERROR",
    "NOT_FOUND",
    "ConflictError",
    "InvalidArgumentError",
    "NotFoundError",
    "StarterAPIException",
    "UnavailableError",
]
