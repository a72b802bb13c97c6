"""Unit tests for the Alembic revision chain and the migration script."""

import importlib.util
from pathlib import Path

import pytest
from alembic.script import ScriptDirectory

from backend.services.bootstrap import alembic_config

pytestmark = pytest.mark.unit

SCRIPT = Path(__file__).parents[2] / "scripts" / "manage_migrations.py"


@pytest.fixture(scope="module")
def manage_migrations():
    spec = importlib.util.spec_from_file_location("manage_migrations", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def config():
    return alembic_config("sqlite://")


def test_single_head(config):
    """Test the revision chain starts at the people table and has one head."""
    script = ScriptDirectory.from_config(config)

    assert script.get_heads() == ["001_create_people"]
    assert script.get_revision("001_create_people").down_revision is None


def test_verify_migrations(manage_migrations, config, capsys):
    assert manage_migrations.verify_migrations(config) is True
    assert "✅" in capsys.readouterr().out


def test_verify_command_exit_code(manage_migrations):
    assert manage_migrations.main(["--database-url", "sqlite://", "verify"]) == 0


def test_no_command_prints_help(manage_migrations, capsys):
    assert manage_migrations.main([]) == 1
    assert "usage" in capsys.readouterr().out


def test_downgrade_cancelled(manage_migrations, config, monkeypatch):
    """Test declining the prompt never touches the database."""
    monkeypatch.setattr("builtins.input", lambda prompt: "no")

    assert manage_migrations.downgrade_database(config, steps=1) is False
