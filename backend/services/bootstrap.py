"""
Database bootstrap: migrations plus first-run seed data.

``initialize_database`` is safe to run on every container start: migrations
are idempotent and the seed only runs while the people table is empty.
"""

import logging
from typing import Any

from alembic import command
from alembic.config import Config
from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from ..core.config import PROJECT_ROOT, settings
from ..database import create_db_engine, create_session_factory, create_tables
from ..models import Person
from ..repositories import PeopleDAO

logger = logging.getLogger(__name__)

ALEMBIC_INI = PROJECT_ROOT / "alembic.ini"
ALEMBIC_DIR = PROJECT_ROOT / "alembic"

SEED_PEOPLE: tuple[dict[str, Any], ...] = (
    {"first_name": "John", "last_name": "Smith", "email": "john.smith@example.com", "age": 28, "city": "New York", "country": "USA"},
    {"first_name": "Emma", "last_name": "Johnson", "email": "emma.johnson@example.com", "age": 34, "city": "London", "country": "UK"},
    {"first_name": "Michael", "last_name": "Brown", "email": "michael.brown@example.com", "age": 42, "city": "Toronto", "country": "Canada"},
    {"first_name": "Sophia", "last_name": "Davis", "email": "sophia.davis@example.com", "age": 25, "city": "Sydney", "country": "Australia"},
    {"first_name": "James", "last_name": "Wilson", "email": "james.wilson@example.com", "age": 31, "city": "Los Angeles", "country": "USA"},
    {"first_name": "Olivia", "last_name": "Martinez", "email": "olivia.martinez@example.com", "age": 29, "city": "Madrid", "country": "Spain"},
    {"first_name": "William", "last_name": "Garcia", "email": "william.garcia@example.com", "age": 36, "city": "Mexico City", "country": "Mexico"},
    {"first_name": "Ava", "last_name": "Rodriguez", "email": "ava.rodriguez@example.com", "age": 27, "city": "Buenos Aires", "country": "Argentina"},
    {"first_name": "Alexander", "last_name": "Lee", "email": "alexander.lee@example.com", "age": 45, "city": "Singapore", "country": "Singapore"},
    {"first_name": "Isabella", "last_name": "Kim", "email": "isabella.kim@example.com", "age": 33, "city": "Seoul", "country": "South Korea"},
    {"first_name": "Benjamin", "last_name": "Nguyen", "email": "benjamin.nguyen@example.com", "age": 38, "city": "Hanoi", "country": "Vietnam"},
    {"first_name": "Mia", "last_name": "Chen", "email": "mia.chen@example.com", "age": 26, "city": "Beijing", "country": "China"},
    {"first_name": "Daniel", "last_name": "Patel", "email": "daniel.patel@example.com", "age": 40, "city": "Mumbai", "country": "India"},
    {"first_name": "Charlotte", "last_name": "Singh", "email": "charlotte.singh@example.com", "age": 30, "city": "Delhi", "country": "India"},
    {"first_name": "Henry", "last_name": "Müller", "email": "henry.muller@example.com", "age": 35, "city": "Berlin", "country": "Germany"},
    {"first_name": "Amelia", "last_name": "Dubois", "email": "amelia.dubois@example.com", "age": 32, "city": "Paris", "country": "France"},
    {"first_name": "Sebastian", "last_name": "Rossi", "email": "sebastian.rossi@example.com", "age": 41, "city": "Rome", "country": "Italy"},
    {"first_name": "Harper", "last_name": "Silva", "email": "harper.silva@example.com", "age": 24, "city": "São Paulo", "country": "Brazil"},
    {"first_name": "Lucas", "last_name": "Kowalski", "email": "lucas.kowalski@example.com", "age": 37, "city": "Warsaw", "country": "Poland"},
    {"first_name": "Evelyn", "last_name": "Andersen", "email": "evelyn.andersen@example.com", "age": 39, "city": "Copenhagen", "country": "Denmark"},
)


def table_exists(db_engine: Engine, table_name: str = Person.__tablename__) -> bool:
    """Check whether ``table_name`` exists in the connected database."""
    return inspect(db_engine).has_table(table_name)


def is_table_empty(dao: PeopleDAO) -> bool:
    """True when the Access Object's table holds no rows."""
    return dao.count() == 0


def alembic_config(database_url: str) -> Config:
    """Alembic configuration pointed at ``database_url``."""
    config = Config(str(ALEMBIC_INI))
    config.set_main_option("script_location", str(ALEMBIC_DIR))
    config.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    return config


def run_migrations(db_engine: Engine) -> None:
    """Bring the schema to the latest revision.

    SQLite has no ``gen_random_uuid()``; there the tables are created from
    the models instead.
    """
    if db_engine.dialect.name == "sqlite":
        logger.info("SQLite database: creating tables from models")
        create_tables(db_engine)
        return

    logger.info("Running migrations...")
    config = alembic_config(db_engine.url.render_as_string(hide_password=False))
    with db_engine.begin() as connection:
        config.attributes["connection"] = connection
        command.upgrade(config, "head")
    logger.info("Migrations completed successfully")


def seed_people(dao: PeopleDAO, people=SEED_PEOPLE) -> int:
    """Insert ``people`` in one transaction. Returns the count inserted.

    A failure leaves the table as it was, so the next run seeds again.
    """
    created = dao.create_many(people)
    logger.info(f"Successfully seeded {len(created)} people")
    return len(created)


def initialize_database(
    db_engine: Engine | None = None,
    session_factory: sessionmaker | None = None,
    seed: bool | None = None,
) -> dict[str, Any]:
    """
    Migrate, then seed the people table if it is empty.

    Args:
        db_engine: Engine to initialize (defaults to one for settings.DATABASE_URL)
        session_factory: Session factory for seeding (defaults to one on db_engine)
        seed: Whether to seed an empty table (defaults to settings.SEED_ON_INIT)

    Returns:
        Summary with ``table_existed`` and ``seeded`` counts
    """
    db_engine = db_engine or create_db_engine()
    session_factory = session_factory or create_session_factory(db_engine)
    seed = settings.SEED_ON_INIT if seed is None else seed

    logger.info("Initializing database...")
    existed = table_exists(db_engine)
    if existed:
        logger.info("Database tables already exist, running migrations if needed...")
    run_migrations(db_engine)

    seeded = 0
    dao = PeopleDAO(session_factory)
    if not seed:
        logger.info("Seeding disabled")
    elif is_table_empty(dao):
        seeded = seed_people(dao)
    else:
        logger.info("People table already has data, skipping seed")

    logger.info("Database initialization complete")
    return {"table_existed": existed, "seeded": seeded}


__all__ = [
    "SEED_PEOPLE",
    "alembic_config",
    "initialize_database",
    "is_table_empty",
    "run_migrations",
    "seed_people",
    "table_exists",
]
