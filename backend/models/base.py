"""
Record schema building blocks.

Every persisted entity mixes in ``RecordMixin``, which declares the single
surrogate identifier and the two timestamp columns. ``describe_record``
turns a model into a plain field description (semantic type, nullability,
uniqueness, default rule) that the Access Object and the migration tooling
read instead of poking at SQLAlchemy internals.
"""

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy import TIMESTAMP, Column, UniqueConstraint, Uuid, func, inspect
from sqlalchemy import types as sqltypes

# Default rules recorded in Column.info["default_rule"]
RANDOM_UUID = "random_uuid"
CURRENT_TIME = "current_time"

# Timestamp roles recorded in Column.info["timestamp"]
CREATED = "created"
UPDATED = "updated"


def utcnow() -> datetime:
    """Get current UTC time as naive datetime (for TIMESTAMP WITHOUT TIME ZONE)."""
    return datetime.now(UTC).replace(tzinfo=None)


class RecordMixin:
    """Identifier and timestamp columns shared by every record."""

    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        info={"default_rule": RANDOM_UUID},
    )
    created_at = Column(
        TIMESTAMP,
        default=utcnow,
        server_default=func.now(),
        nullable=False,
        info={"default_rule": CURRENT_TIME, "timestamp": CREATED},
    )
    updated_at = Column(
        TIMESTAMP,
        default=utcnow,
        server_default=func.now(),
        nullable=False,
        info={"default_rule": CURRENT_TIME, "timestamp": UPDATED},
    )


@dataclass(frozen=True)
class FieldSpec:
    """Declarative description of one record field."""

    name: str  # attribute name on the model
    column: str  # column name in the store
    type: str  # semantic type: uuid | string | integer | float | boolean | datetime | text
    nullable: bool
    unique: bool
    primary_key: bool = False
    max_length: int | None = None
    default_rule: str | None = None
    timestamp: str | None = None

    @property
    def required_on_create(self) -> bool:
        """Caller must supply a value: not nullable and no default rule."""
        return not self.nullable and self.default_rule is None and not self.primary_key


def _semantic_type(column_type: sqltypes.TypeEngine) -> str:
    if isinstance(column_type, sqltypes.Uuid):
        return "uuid"
    if isinstance(column_type, sqltypes.DateTime):
        return "datetime"
    if isinstance(column_type, sqltypes.Boolean):
        return "boolean"
    if isinstance(column_type, sqltypes.Integer):
        return "integer"
    if isinstance(column_type, sqltypes.Numeric):
        return "float"
    if isinstance(column_type, sqltypes.Text):
        return "text"
    if isinstance(column_type, sqltypes.String):
        return "string"
    return column_type.__class__.__name__.lower()


def _is_unique(column, table) -> bool:
    if column.unique or column.primary_key:
        return True
    # Single-column UNIQUE constraints declared in __table_args__
    for constraint in table.constraints:
        if isinstance(constraint, UniqueConstraint) and list(
            constraint.columns.keys()
        ) == [column.key]:
            return True
    return False


def describe_record(model) -> dict[str, FieldSpec]:
    """Return attribute name -> FieldSpec for every mapped column of ``model``."""
    mapper = inspect(model)
    table = mapper.local_table
    fields: dict[str, FieldSpec] = {}
    for attr in mapper.column_attrs:
        column = attr.columns[0]
        fields[attr.key] = FieldSpec(
            name=attr.key,
            column=column.name,
            type=_semantic_type(column.type),
            nullable=bool(column.nullable) and not column.primary_key,
            unique=_is_unique(column, table),
            primary_key=column.primary_key,
            max_length=getattr(column.type, "length", None),
            default_rule=column.info.get("default_rule"),
            timestamp=column.info.get("timestamp"),
        )
    return fields


def assert_record_schema(model) -> dict[str, FieldSpec]:
    """Check the record invariants and return the field description.

    A record has exactly one identifier field and exactly one created and one
    updated timestamp.
    """
    fields = describe_record(model)
    name = getattr(model, "__name__", repr(model))

    identifiers = [f for f in fields.values() if f.primary_key]
    if len(identifiers) != 1:
        raise ValueError(f"{name} must declare exactly one identifier field")

    roles = sorted(f.timestamp for f in fields.values() if f.timestamp)
    if roles != [CREATED, UPDATED]:
        raise ValueError(
            f"{name} must declare exactly one created and one updated timestamp"
        )
    return fields


__all__ = [
    "CREATED",
    "CURRENT_TIME",
    "RANDOM_UUID",
    "UPDATED",
    "FieldSpec",
    "RecordMixin",
    "assert_record_schema",
    "describe_record",
    "utcnow",
]
