"""Pydantic contract schemas for the API."""

from .common import APIModel, ErrorResponse, UTCDateTime
from .health import HealthResponse
from .people import (
    PersonCreate,
    PersonId,
    PersonListQuery,
    PersonListResponse,
    PersonResponse,
    PersonUpdate,
)

__all__ = [
    "APIModel",
    "ErrorResponse",
    # Health
    "HealthResponse",
    # People
    "PersonCreate",
    "PersonId",
    "PersonListQuery",
    "PersonListResponse",
    "PersonResponse",
    "PersonUpdate",
    "UTCDateTime",
]
