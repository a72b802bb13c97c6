"""Shared contract schema pieces."""

from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _as_utc(value: datetime) -> datetime:
    # Records store naive UTC; the wire always carries an explicit offset
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


UTCDateTime = Annotated[datetime, AfterValidator(_as_utc)]


def omit_null_defaults(schema: dict[str, Any], model: type) -> None:
    """Drop ``default: null`` from optional-but-not-nullable properties."""
    for prop in schema.get("properties", {}).values():
        if "default" in prop and prop["default"] is None:
            del prop["default"]


class APIModel(BaseModel):
    """Base for all wire shapes: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error: str = Field(description="HTTP status label, e.g. 'Not Found'")
    message: str = Field(description="Human readable explanation")

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"error": "Not Found", "message": "Person with id 00000000-0000-0000-0000-000000000000 not found"}
            ]
        }
    )


__all__ = ["APIModel", "ErrorResponse", "UTCDateTime", "omit_null_defaults"]
