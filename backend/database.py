"""
Database connection and session management.

Supports local PostgreSQL (production) and SQLite (tests, local tooling).
Access Objects receive a session factory from here; nothing else in the
application opens sessions against the record store.

NOTES:
- Connection pooling with pre-ping validation
- Statement and connect timeouts bound every store call
- Event listeners for connection health monitoring
"""

import logging

from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from .core.config import settings

logger = logging.getLogger(__name__)

# Create base class for models
Base = declarative_base()

DATABASE_URL = settings.DATABASE_URL


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


def create_db_engine(url: str | None = None, echo: bool | None = None) -> Engine:
    """Create an engine for ``url`` with pool settings from configuration."""
    url = url or DATABASE_URL
    echo = settings.SQL_ECHO if echo is None else echo

    if url.startswith("sqlite"):
        # SQLite configuration; in-memory databases share one connection
        kwargs = {"connect_args": {"check_same_thread": False}, "echo": echo}
        if _is_memory_sqlite(url):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)

    # PostgreSQL configuration
    _pg_connect_args = {
        "connect_timeout": 10,
        "options": f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}",
    }

    db_engine = create_engine(
        url,
        poolclass=QueuePool,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,  # Verify connections before using
        pool_recycle=settings.DB_POOL_RECYCLE,  # Recycle connections periodically
        pool_timeout=settings.DB_POOL_TIMEOUT,  # Timeout for getting connection from pool
        pool_use_lifo=True,
        echo=echo,
        connect_args=_pg_connect_args,
    )
    _attach_pool_listeners(db_engine)
    return db_engine


def _attach_pool_listeners(db_engine: Engine) -> None:
    """Add connection pool event listeners for monitoring."""

    @event.listens_for(db_engine, "connect")
    def receive_connect(dbapi_conn, connection_record):
        logger.debug("New database connection established")

    @event.listens_for(db_engine, "checkout")
    def receive_checkout(dbapi_conn, connection_record, connection_proxy):
        logger.debug(
            "Connection checked out from pool (size: %s)", db_engine.pool.size()
        )

    @event.listens_for(db_engine, "checkin")
    def receive_checkin(dbapi_conn, connection_record):
        logger.debug("Connection returned to pool")


def create_session_factory(db_engine: Engine) -> sessionmaker:
    """Create a session factory bound to ``db_engine``."""
    return sessionmaker(
        autocommit=False, autoflush=False, expire_on_commit=False, bind=db_engine
    )


engine = create_db_engine()

# Create session factory (sync)
SessionLocal = create_session_factory(engine)


def check_connection(db_engine: Engine | None = None) -> bool:
    """Return True if the store answers ``SELECT 1``."""
    try:
        with (db_engine or engine).connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning(f"Database connection check failed: {e}")
        return False


def create_tables(db_engine: Engine | None = None):
    """Create all database tables"""
    from . import models  # noqa: F401  (registers models with Base)

    Base.metadata.create_all(bind=db_engine or engine)


def drop_tables(db_engine: Engine | None = None):
    """Drop all database tables"""
    Base.metadata.drop_all(bind=db_engine or engine)


__all__ = [
    "Base",
    "SessionLocal",
    "check_connection",
    "create_db_engine",
    "create_session_factory",
    "create_tables",
    "drop_tables",
    "engine",
]
