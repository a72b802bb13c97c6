"""Unit tests for request validation and error-body helpers."""

import pytest

from backend.api.middleware import error_body
from backend.api.validation_middleware import (
    format_validation_message,
    parse_pydantic_errors,
)

pytestmark = pytest.mark.unit


def test_parse_body_error():
    """Test body errors keep their field path and constraint."""
    errors = [
        {
            "loc": ("body", "age"),
            "msg": "Input should be less than or equal to 150",
            "type": "less_than_equal",
            "ctx": {"le": 150},
        }
    ]

    [detail] = parse_pydantic_errors(errors)

    assert detail.location == "body"
    assert detail.field == "age"
    assert detail.constraint == "le: 150"
    assert str(detail) == "body/age input should be less than or equal to 150"


def test_parse_error_without_field():
    """Test a whole-body error has no field path."""
    [detail] = parse_pydantic_errors(
        [{"loc": ("body",), "msg": "Field required", "type": "missing"}]
    )

    assert detail.field == ""
    assert str(detail) == "body field required"
    assert "constraint" not in detail.to_dict()


def test_format_message_joins_errors():
    """Test several failures become one message."""
    details = parse_pydantic_errors(
        [
            {"loc": ("query", "limit"), "msg": "Bad", "type": "x"},
            {"loc": ("path", "person_id"), "msg": "Bad", "type": "x"},
        ]
    )

    assert format_validation_message(details) == "query/limit bad; path/person_id bad"
    assert format_validation_message([]) == "Request validation failed"


@pytest.mark.parametrize(
    "status,label",
    [(400, "Bad Request"), (404, "Not Found"), (405, "Method Not Allowed"), (500, "Internal Server Error")],
)
def test_error_body_labels(status, label):
    """Test the error label follows the HTTP status phrase."""
    assert error_body(status, "detail") == {"error": label, "message": "detail"}


def test_error_body_unknown_status():
    assert error_body(599, "detail")["error"] == "Internal Server Error"
