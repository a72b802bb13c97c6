"""Unit tests for custom exceptions."""

import uuid

from backend.core.exceptions import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    StarterAPIException,
    UnavailableError,
)


def test_base_exception():
    """Test base StarterAPIException."""
    exc = StarterAPIException("Test error", status_code=500, error_code="Internal Server Error")

    assert exc.detail == "Test error"
    assert exc.status_code == 500
    assert exc.timestamp is not None
    assert exc.to_dict() == {"error": "Internal Server Error", "message": "Test error"}


def test_invalid_argument_error():
    """Test InvalidArgumentError maps to 400."""
    exc = InvalidArgumentError("limit must be between 1 and 100")

    assert exc.status_code == 400
    assert exc.to_dict() == {
        "error": "Bad Request",
        "message": "limit must be between 1 and 100",
    }


def test_not_found_error():
    """Test NotFoundError message names the entity and id."""
    record_id = uuid.uuid4()
    exc = NotFoundError("Person", record_id)

    assert exc.status_code == 404
    assert exc.error_code == "Not Found"
    assert exc.detail == f"Person with id {record_id} not found"
    assert exc.record_id == record_id


def test_conflict_error():
    """Test ConflictError is surfaced as 400 and remembers the field."""
    exc = ConflictError("Person with this email already exists", field="email")

    assert exc.status_code == 400
    assert exc.error_code == "Bad Request"
    assert exc.field == "email"


def test_unavailable_error():
    """Test UnavailableError defaults."""
    exc = UnavailableError()

    assert exc.status_code == 500
    assert exc.to_dict() == {
        "error": "Internal Server Error",
        "message": "Database unavailable",
    }


def test_exception_inheritance():
    """Test every failure kind derives from StarterAPIException."""
    for exc in (
        InvalidArgumentError("x"),
        NotFoundError("Person", "1"),
        ConflictError("x"),
        UnavailableError(),
    ):
        assert isinstance(exc, StarterAPIException)
        assert isinstance(exc, Exception)
