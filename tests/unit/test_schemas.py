"""Unit tests for contract schemas."""

import uuid
from datetime import datetime

import pytest
from pydantic import ValidationError

from backend.schemas import (
    ErrorResponse,
    PersonCreate,
    PersonListQuery,
    PersonListResponse,
    PersonResponse,
    PersonUpdate,
)

pytestmark = pytest.mark.unit


def test_person_create_camel_case(person_payload):
    """Test wire names are camelCase and attributes snake_case."""
    person = PersonCreate(**person_payload)

    assert person.first_name == "Ann"
    assert person.model_dump() == {
        "first_name": "Ann",
        "last_name": "Lee",
        "email": "ann@example.com",
        "age": 30,
        "city": "Oslo",
        "country": "Norway",
    }


@pytest.mark.parametrize(
    "field,value",
    [
        ("firstName", ""),
        ("lastName", "x" * 101),
        ("email", "not-an-email"),
        ("age", -1),
        ("age", 151),
        ("city", ""),
        ("country", None),
    ],
)
def test_person_create_rejects_invalid(person_payload, field, value):
    """Test create-input bounds."""
    person_payload[field] = value

    with pytest.raises(ValidationError):
        PersonCreate(**person_payload)


def test_person_create_requires_every_field(person_payload):
    """Test a missing field fails validation."""
    del person_payload["age"]

    with pytest.raises(ValidationError):
        PersonCreate(**person_payload)


def test_person_update_is_partial():
    """Test only supplied fields are set."""
    update = PersonUpdate(age=31)

    assert update.model_dump(exclude_unset=True) == {"age": 31}
    assert PersonUpdate().model_dump(exclude_unset=True) == {}


def test_person_update_rejects_explicit_null():
    """Test null is not a valid value for any field."""
    with pytest.raises(ValidationError):
        PersonUpdate(firstName=None)


def test_person_update_schema_has_no_required_fields():
    """Test the published update shape has no required or null defaults."""
    schema = PersonUpdate.model_json_schema(by_alias=True)

    assert "required" not in schema
    assert "default" not in schema["properties"]["firstName"]
    assert schema["properties"]["email"]["maxLength"] == 255


def test_list_query_defaults():
    """Test default paging."""
    query = PersonListQuery()

    assert query.limit == 10
    assert query.offset == 0
    assert query.search is None


@pytest.mark.parametrize("params", [{"limit": 0}, {"limit": 101}, {"offset": -1}, {"search": ""}])
def test_list_query_bounds(params):
    """Test list-query bounds."""
    with pytest.raises(ValidationError):
        PersonListQuery(**params)


def test_person_response_from_record(people_dao, person_data):
    """Test a record is projected into the response shape."""
    person = people_dao.create(person_data)

    response = PersonResponse.model_validate(person)
    body = response.model_dump(mode="json", by_alias=True)

    assert body["id"] == str(person.id)
    assert body["firstName"] == "Ann"
    assert body["createdAt"].endswith("Z")
    assert set(body) == {
        "id",
        "firstName",
        "lastName",
        "email",
        "age",
        "city",
        "country",
        "createdAt",
        "updatedAt",
    }


def test_response_timestamps_are_utc():
    """Test naive timestamps are marked as UTC."""
    response = PersonResponse(
        id=uuid.uuid4(),
        first_name="Ann",
        last_name="Lee",
        email="ann@example.com",
        age=30,
        city="Oslo",
        country="Norway",
        created_at=datetime(2025, 1, 1, 12, 0, 0),
        updated_at=datetime(2025, 1, 1, 12, 0, 0),
    )

    assert response.created_at.utcoffset().total_seconds() == 0


def test_list_response_shape():
    """Test the list envelope."""
    body = PersonListResponse(data=[], total=0, limit=10, offset=0).model_dump(by_alias=True)

    assert body == {"data": [], "total": 0, "limit": 10, "offset": 0}


def test_error_response_shape():
    """Test the shared error body."""
    assert set(ErrorResponse.model_fields) == {"error", "message"}
