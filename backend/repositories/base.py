"""
Base Access Object
==================

Every entity gets one Access Object (DAO): the only code allowed to read or
write its table. A DAO is constructed with a SQLAlchemy session factory,
opens one short session per call and returns detached ORM instances.

Failure kinds raised here (see ``backend.core.exceptions``):

- ``InvalidArgumentError`` for malformed ids, unknown, missing or malformed
  fields, and values the store rejects (``DataError`` and friends)
- ``ConflictError`` for uniqueness violations
- ``UnavailableError`` when the store cannot be reached (operational,
  interface and pool-timeout errors, or an invalidated connection)

Pagination is offset-based. ``find_all`` reads the page and the total in one
session, which on PostgreSQL's default READ COMMITTED isolation is *not* a
snapshot: ``total`` may disagree with the page under concurrent writes, and a
record may be skipped or repeated across pages while rows are inserted or
deleted.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Generator, Iterable, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import DBAPIError, IntegrityError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session, sessionmaker

from ..core.constants import DATABASE_UNAVAILABLE, MAX_OFFSET, MAX_PAGE_SIZE, MIN_PAGE_SIZE
from ..core.exceptions import (
    ConflictError,
    InvalidArgumentError,
    StarterAPIException,
    UnavailableError,
)
from ..models.base import FieldSpec, assert_record_schema, utcnow

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"

# FieldSpec.type -> accepted Python value types
_PYTHON_TYPES: dict[str, type | tuple[type, ...]] = {
    "string": str,
    "text": str,
    "integer": int,
    "float": (int, float),
    "boolean": bool,
    "uuid": uuid.UUID,
    "datetime": datetime,
}


@dataclass
class Page(Generic[ModelT]):
    """One page of records plus the unpaginated total."""

    items: list[ModelT]
    total: int


def next_timestamp(previous: datetime | None) -> datetime:
    """Current time, forced strictly past ``previous``."""
    now = utcnow()
    if previous is not None and now <= previous:
        now = previous + timedelta(microseconds=1)
    return now


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class BaseDAO(Generic[ModelT]):
    """CRUD Access Object over one record model.

    Subclasses set ``model`` and ``entity_name``.
    """

    model: type[ModelT]
    entity_name: str = "Record"

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        self.fields: dict[str, FieldSpec] = assert_record_schema(self.model)
        self.identifier = next(f.name for f in self.fields.values() if f.primary_key)
        self.unique_fields = frozenset(
            f.name for f in self.fields.values() if f.unique and not f.primary_key
        )
        self.writable_fields = frozenset(
            f.name
            for f in self.fields.values()
            if not f.primary_key and f.timestamp is None
        )
        self.required_fields = frozenset(
            f.name for f in self.fields.values() if f.required_on_create
        )
        self.searchable_fields: tuple[str, ...] = getattr(
            self.model, "__searchable__", ()
        )
        self._updated_field = next(
            f.name for f in self.fields.values() if f.timestamp == "updated"
        )
        self._created_field = next(
            f.name for f in self.fields.values() if f.timestamp == "created"
        )

    # ------------------------------------------------------------------
    # Session and error translation
    # ------------------------------------------------------------------

    @contextmanager
    def _session(self) -> Generator[Session, None, None]:
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except IntegrityError as e:
            session.rollback()
            raise self._translate_integrity_error(e) from e
        except (OperationalError, InterfaceError, PoolTimeoutError) as e:
            session.rollback()
            logger.error(f"{self.entity_name} store unavailable: {e}")
            raise UnavailableError(DATABASE_UNAVAILABLE) from e
        except DBAPIError as e:
            session.rollback()
            if e.connection_invalidated:
                logger.error(f"{self.entity_name} store unavailable: {e}")
                raise UnavailableError(DATABASE_UNAVAILABLE) from e
            # DataError, ProgrammingError, ...: the store rejected the values
            logger.warning(f"{self.entity_name} rejected by store: {e.orig}")
            raise InvalidArgumentError(f"Invalid {self.entity_name} data: {e.orig}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def _translate_integrity_error(self, error: IntegrityError) -> StarterAPIException:
        orig = error.orig
        code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
        message = str(orig)
        if code == UNIQUE_VIOLATION or (code is None and "unique" in message.lower()):
            field = next(
                (
                    name
                    for name in sorted(self.unique_fields)
                    if self.fields[name].column in message
                ),
                None,
            )
            logger.warning(f"{self.entity_name} uniqueness conflict on {field}")
            if field:
                return ConflictError(
                    f"{self.entity_name} with this {field} already exists", field=field
                )
            return ConflictError(f"{self.entity_name} violates a uniqueness constraint")
        return InvalidArgumentError(f"Invalid {self.entity_name} data: {message}")

    # ------------------------------------------------------------------
    # Input coercion
    # ------------------------------------------------------------------

    def _coerce_id(self, record_id: Any) -> uuid.UUID:
        if isinstance(record_id, uuid.UUID):
            return record_id
        try:
            return uuid.UUID(str(record_id))
        except (ValueError, TypeError):
            raise InvalidArgumentError(
                f"Invalid {self.entity_name} id: {record_id!r}"
            ) from None

    def _values(self, data: Any, partial: bool) -> dict[str, Any]:
        """Normalize create/update input to a dict of writable attributes."""
        if hasattr(data, "model_dump"):
            values = data.model_dump(exclude_unset=True)
        elif isinstance(data, Mapping):
            values = dict(data)
        else:
            raise InvalidArgumentError(
                f"{self.entity_name} data must be a mapping, got {type(data).__name__}"
            )

        unknown = sorted(set(values) - self.writable_fields)
        if unknown:
            raise InvalidArgumentError(
                f"Unknown {self.entity_name} field(s): {', '.join(unknown)}"
            )

        if not partial:
            missing = sorted(self.required_fields - set(values))
            if missing:
                raise InvalidArgumentError(
                    f"Missing required {self.entity_name} field(s): {', '.join(missing)}"
                )

        nulls = sorted(
            name
            for name, value in values.items()
            if value is None and not self.fields[name].nullable
        )
        if nulls:
            raise InvalidArgumentError(
                f"{self.entity_name} field(s) cannot be null: {', '.join(nulls)}"
            )

        for name, value in values.items():
            if value is not None:
                self._check_value(self.fields[name], value)
        return values

    def _check_value(self, field: FieldSpec, value: Any) -> None:
        """Reject a value that does not fit the column's semantic type or length."""
        expected = _PYTHON_TYPES.get(field.type)
        # bool is an int subclass but never a valid integer/float value
        if expected is not None and (
            not isinstance(value, expected)
            or (isinstance(value, bool) and field.type != "boolean")
        ):
            raise InvalidArgumentError(
                f"{self.entity_name}.{field.name} must be {field.type}, "
                f"got {type(value).__name__}"
            )
        if field.max_length is not None and len(value) > field.max_length:
            raise InvalidArgumentError(
                f"{self.entity_name}.{field.name} must be at most "
                f"{field.max_length} characters"
            )

    # ------------------------------------------------------------------
    # Query helpers
    # ------------------------------------------------------------------

    def _search_clause(self, search: str | None):
        if not search or not self.searchable_fields:
            return None
        pattern = f"%{_escape_like(search)}%"
        return or_(
            *(
                getattr(self.model, name).ilike(pattern, escape="\\")
                for name in self.searchable_fields
            )
        )

    def _ordering(self):
        # Insertion order, identifier as tie-break
        return (
            getattr(self.model, self._created_field).asc(),
            getattr(self.model, self.identifier).asc(),
        )

    def _pk_column(self):
        return getattr(self.model, self.identifier)

    @staticmethod
    def _detach(session: Session, record: ModelT | None) -> ModelT | None:
        # Loaded state stays readable after the session closes
        if record is not None:
            session.expunge(record)
        return record

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def find_all(
        self, limit: int = 10, offset: int = 0, search: str | None = None
    ) -> Page[ModelT]:
        """Get one page of records, optionally filtered by ``search``."""
        if not MIN_PAGE_SIZE <= limit <= MAX_PAGE_SIZE:
            raise InvalidArgumentError(
                f"limit must be between {MIN_PAGE_SIZE} and {MAX_PAGE_SIZE}"
            )
        if not 0 <= offset <= MAX_OFFSET:
            raise InvalidArgumentError(f"offset must be between 0 and {MAX_OFFSET}")

        criteria = self._search_clause(search)
        stmt = select(self.model)
        count_stmt = select(func.count()).select_from(self.model)
        if criteria is not None:
            stmt = stmt.where(criteria)
            count_stmt = count_stmt.where(criteria)
        stmt = stmt.order_by(*self._ordering()).limit(limit).offset(offset)

        with self._session() as session:
            items = list(session.scalars(stmt).all())
            total = session.scalar(count_stmt) or 0
            session.expunge_all()

        logger.debug(
            f"{self.entity_name} page limit={limit} offset={offset} "
            f"returned {len(items)}/{total}"
        )
        return Page(items=items, total=total)

    def find_by_id(self, record_id: Any) -> ModelT | None:
        """Find a record by identifier. Malformed ids raise InvalidArgumentError."""
        pk = self._coerce_id(record_id)
        with self._session() as session:
            return self._detach(session, session.get(self.model, pk))

    def find_by_field(self, field: str, value: Any) -> ModelT | None:
        """Find a record by a field declared unique."""
        if field not in self.unique_fields:
            raise InvalidArgumentError(
                f"{self.entity_name}.{field} is not a unique field"
            )
        stmt = select(self.model).where(getattr(self.model, field) == value).limit(1)
        with self._session() as session:
            return self._detach(session, session.scalars(stmt).first())

    def create(self, data: Any) -> ModelT:
        """Insert a new record; id and timestamps are generated."""
        values = self._values(data, partial=False)
        now = utcnow()
        record = self.model(**values)
        setattr(record, self._created_field, now)
        setattr(record, self._updated_field, now)

        with self._session() as session:
            session.add(record)
            session.flush()
            self._detach(session, record)

        logger.info(f"Created {self.entity_name} {getattr(record, self.identifier)}")
        return record

    def create_many(self, rows: Iterable[Any]) -> list[ModelT]:
        """Insert every row in one transaction: all are written or none are.

        Creation timestamps strictly increase in input order, so listing
        returns the rows in the order given.
        """
        all_values = [self._values(data, partial=False) for data in rows]
        records = []
        now = None
        for values in all_values:
            now = next_timestamp(now)
            record = self.model(**values)
            setattr(record, self._created_field, now)
            setattr(record, self._updated_field, now)
            records.append(record)

        with self._session() as session:
            session.add_all(records)
            session.flush()
            session.expunge_all()

        logger.info(f"Created {len(records)} {self.entity_name} record(s)")
        return records

    def update(self, record_id: Any, data: Any) -> ModelT | None:
        """Apply present fields; the update timestamp advances even if nothing else changes."""
        pk = self._coerce_id(record_id)
        values = self._values(data, partial=True)

        with self._session() as session:
            record = session.get(self.model, pk)
            if record is None:
                return None
            for name, value in values.items():
                setattr(record, name, value)
            setattr(
                record,
                self._updated_field,
                next_timestamp(getattr(record, self._updated_field)),
            )
            session.flush()
            self._detach(session, record)

        logger.info(f"Updated {self.entity_name} {pk} fields={sorted(values)}")
        return record

    def delete(self, record_id: Any) -> bool:
        """Delete a record. Returns False if it did not exist."""
        pk = self._coerce_id(record_id)
        stmt = (
            delete(self.model)
            .where(self._pk_column() == pk)
            .execution_options(synchronize_session=False)
        )
        with self._session() as session:
            result = session.execute(stmt)
            deleted = result.rowcount > 0

        if deleted:
            logger.info(f"Deleted {self.entity_name} {pk}")
        return deleted

    def exists(self, record_id: Any) -> bool:
        """Check if a record exists by identifier."""
        pk = self._coerce_id(record_id)
        stmt = select(self._pk_column()).where(self._pk_column() == pk).limit(1)
        with self._session() as session:
            return session.scalar(stmt) is not None

    def count(self, search: str | None = None) -> int:
        """Count records, honouring the same ``search`` filter as find_all."""
        stmt = select(func.count()).select_from(self.model)
        criteria = self._search_clause(search)
        if criteria is not None:
            stmt = stmt.where(criteria)
        with self._session() as session:
            return session.scalar(stmt) or 0


__all__ = ["BaseDAO", "Page", "next_timestamp"]
