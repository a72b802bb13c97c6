"""
Testing Framework

Unit tests exercise the Access Object, schemas, route table and code
generation directly; integration tests drive the full app through
``TestClient``. Both run against a fresh in-memory SQLite database per test.
"""

import os
import sys
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Set test environment BEFORE importing modules
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_TO_FILE"] = "false"
os.environ["SERVER_URL"] = "http://localhost:3001"

# Import after environment setup
from backend.api.main import create_app
from backend.database import create_db_engine, create_session_factory, create_tables, drop_tables
from backend.repositories import PeopleDAO

# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (full app over HTTP)")


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture
def db_engine():
    """Fresh in-memory SQLite database with all tables."""
    engine = create_db_engine("sqlite://")
    create_tables(engine)
    yield engine
    drop_tables(engine)
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return create_session_factory(db_engine)


@pytest.fixture
def people_dao(session_factory) -> PeopleDAO:
    return PeopleDAO(session_factory)


# =============================================================================
# API CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def app(session_factory):
    """Application wired to the test database."""
    return create_app(session_factory=session_factory)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# DATA FIXTURES
# =============================================================================


@pytest.fixture
def person_data() -> dict:
    """Create-input in attribute (snake_case) form."""
    return {
        "first_name": "Ann",
        "last_name": "Lee",
        "email": "ann@example.com",
        "age": 30,
        "city": "Oslo",
        "country": "Norway",
    }


@pytest.fixture
def person_payload() -> dict:
    """Create-input as sent over the wire (camelCase)."""
    return {
        "firstName": "Ann",
        "lastName": "Lee",
        "email": "ann@example.com",
        "age": 30,
        "city": "Oslo",
        "country": "Norway",
    }


def make_person(index: int) -> dict:
    """Distinct create-input for bulk inserts."""
    return {
        "first_name": f"First{index}",
        "last_name": f"Last{index}",
        "email": f"person{index}@example.com",
        "age": 20 + index % 50,
        "city": "Oslo" if index % 2 else "Bergen",
        "country": "Norway",
    }


@pytest.fixture
def person_factory():
    return make_person
