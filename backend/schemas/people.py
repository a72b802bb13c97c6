"""People contract schemas.

The create shape requires every writable field, the update shape accepts any
subset of them, and the response shape is what the API returns. None of them
exposes a field the client is not allowed to set: ``id``, ``createdAt`` and
``updatedAt`` only appear in responses.
"""

import uuid
from typing import Annotated

from fastapi import Path
from pydantic import ConfigDict, EmailStr, Field

from ..core.constants import (
    DEFAULT_PAGE_SIZE,
    EMAIL_MAX_LENGTH,
    MAX_AGE,
    MAX_OFFSET,
    MAX_PAGE_SIZE,
    MIN_AGE,
    MIN_PAGE_SIZE,
    NAME_MAX_LENGTH,
    PLACE_MAX_LENGTH,
    SEARCH_MAX_LENGTH,
)
from .common import APIModel, UTCDateTime, omit_null_defaults

PersonId = Annotated[uuid.UUID, Path(description="Person identifier (UUID)")]


class PersonCreate(APIModel):
    """Fields required to create a person."""

    first_name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    last_name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    email: EmailStr = Field(..., json_schema_extra={"maxLength": EMAIL_MAX_LENGTH})
    age: int = Field(..., ge=MIN_AGE, le=MAX_AGE)
    city: str = Field(..., min_length=1, max_length=PLACE_MAX_LENGTH)
    country: str = Field(..., min_length=1, max_length=PLACE_MAX_LENGTH)

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "firstName": "Ann",
                    "lastName": "Lee",
                    "email": "ann@example.com",
                    "age": 30,
                    "city": "Oslo",
                    "country": "Norway",
                }
            ]
        }
    )


class PersonUpdate(APIModel):
    """Partial update: any subset of the create fields.

    Absent fields are left unchanged. An explicit ``null`` is rejected: no
    person field is nullable.
    """

    first_name: str = Field(None, min_length=1, max_length=NAME_MAX_LENGTH)
    last_name: str = Field(None, min_length=1, max_length=NAME_MAX_LENGTH)
    email: EmailStr = Field(None, json_schema_extra={"maxLength": EMAIL_MAX_LENGTH})
    age: int = Field(None, ge=MIN_AGE, le=MAX_AGE)
    city: str = Field(None, min_length=1, max_length=PLACE_MAX_LENGTH)
    country: str = Field(None, min_length=1, max_length=PLACE_MAX_LENGTH)

    # None defaults are never validated; an explicit null fails the type check
    model_config = ConfigDict(json_schema_extra=omit_null_defaults)


class PersonListQuery(APIModel):
    """Query string of the list endpoint."""

    limit: int = Field(DEFAULT_PAGE_SIZE, ge=MIN_PAGE_SIZE, le=MAX_PAGE_SIZE)
    offset: int = Field(0, ge=0, le=MAX_OFFSET)
    search: str | None = Field(
        None,
        min_length=1,
        max_length=SEARCH_MAX_LENGTH,
        description="Case-insensitive substring matched against name, email, city and country",
    )


class PersonResponse(APIModel):
    """A person as returned by the API."""

    id: uuid.UUID
    first_name: str
    last_name: str
    email: str = Field(json_schema_extra={"format": "email"})
    age: int = Field(ge=MIN_AGE)
    city: str
    country: str
    created_at: UTCDateTime
    updated_at: UTCDateTime


class PersonListResponse(APIModel):
    """One page of people plus the total matching the filter."""

    data: list[PersonResponse]
    total: int = Field(ge=0)
    limit: int = Field(ge=MIN_PAGE_SIZE, le=MAX_PAGE_SIZE)
    offset: int = Field(ge=0)


__all__ = [
    "PersonCreate",
    "PersonId",
    "PersonListQuery",
    "PersonListResponse",
    "PersonResponse",
    "PersonUpdate",
]
