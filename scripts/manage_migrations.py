#!/usr/bin/env python3
"""
Database Migration Management Script

Wraps Alembic's command API with the project's configuration
(``alembic.ini`` at the repo root, ``settings.DATABASE_URL``).

Usage:
    python scripts/manage_migrations.py status
    python scripts/manage_migrations.py generate "add people phone"
    python scripts/manage_migrations.py upgrade
    python scripts/manage_migrations.py downgrade --steps 1
    python scripts/manage_migrations.py verify
"""
import argparse
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from alembic import command  # noqa: E402
from alembic.runtime.migration import MigrationContext  # noqa: E402
from alembic.script import ScriptDirectory  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402

from backend.core.config import settings  # noqa: E402
from backend.services.bootstrap import alembic_config  # noqa: E402


def pending_revisions(config, database_url: str) -> list[str]:
    """Revisions between the database's current state and head."""
    script = ScriptDirectory.from_config(config)
    db_engine = create_engine(database_url)
    try:
        with db_engine.connect() as connection:
            current = MigrationContext.configure(connection).get_current_heads()
    finally:
        db_engine.dispose()

    head = script.get_current_head()
    if head in current:
        return []
    base = current[0] if current else "base"
    return [rev.revision for rev in script.iterate_revisions(head, base) if rev.revision not in current]


def check_status(config, database_url: str) -> None:
    print("🔍 Checking migration status...\n")
    print("Current database version:")
    command.current(config, verbose=False)

    print("\n" + "=" * 50 + "\n")
    print("Migration history:")
    command.history(config, rev_range="-3:", verbose=True)

    pending = pending_revisions(config, database_url)
    if pending:
        print(f"\n⚠️  Pending migrations: {', '.join(reversed(pending))}")
    else:
        print("\n✅ Database is up to date")


def generate_migration(config, message: str, autogenerate: bool = True) -> None:
    print(f"🔧 Generating migration: {message}\n")
    command.revision(config, message=message, autogenerate=autogenerate)
    print("\n✅ Migration generated successfully")
    print("\n⚠️  Review the generated migration file before applying!")


def upgrade_database(config, revision: str = "head") -> None:
    print(f"⬆️  Upgrading database to: {revision}\n")
    command.upgrade(config, revision)
    print("\n✅ Database upgraded successfully")


def downgrade_database(
    config, steps: int = 1, revision: str | None = None, assume_yes: bool = False
) -> bool:
    """Roll back to ``revision`` or by ``steps``. Returns False if cancelled."""
    target = revision or f"-{steps}"
    print(f"⬇️  Downgrading database to: {target}\n")

    if not assume_yes:
        confirm = input("Are you sure you want to downgrade? This may cause data loss. (yes/no): ")
        if confirm.lower() != "yes":
            print("Cancelled.")
            return False

    command.downgrade(config, target)
    print("\n✅ Database downgraded successfully")
    return True


def verify_migrations(config) -> bool:
    """The revision chain has exactly one head and no gaps."""
    print("🔍 Verifying migrations...\n")
    script = ScriptDirectory.from_config(config)

    heads = script.get_heads()
    if len(heads) != 1:
        print(f"⚠️  Expected one migration head, found {len(heads)}: {heads}")
        return False

    # Walking head -> base raises if a down_revision is missing
    chain = [rev.revision for rev in script.walk_revisions()]
    print(f"✅ Migrations are valid ({len(chain)} revision(s), head {heads[0]})")
    return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Database Migration Management")
    parser.add_argument("--database-url", default=settings.DATABASE_URL)
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("status", help="Show migration status")

    gen_parser = subparsers.add_parser("generate", help="Generate new migration")
    gen_parser.add_argument("message", help="Migration description")
    gen_parser.add_argument("--manual", action="store_true", help="Don't autogenerate")

    up_parser = subparsers.add_parser("upgrade", help="Apply migrations")
    up_parser.add_argument("--revision", default="head", help="Target revision")

    down_parser = subparsers.add_parser("downgrade", help="Rollback migrations")
    down_parser.add_argument("--steps", type=int, default=1, help="Number of steps")
    down_parser.add_argument("--revision", help="Target revision")
    down_parser.add_argument("--yes", action="store_true", help="Skip confirmation")

    subparsers.add_parser("verify", help="Verify migration integrity")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    config = alembic_config(args.database_url)

    if args.command == "status":
        check_status(config, args.database_url)
    elif args.command == "generate":
        generate_migration(config, args.message, autogenerate=not args.manual)
    elif args.command == "upgrade":
        upgrade_database(config, args.revision)
    elif args.command == "downgrade":
        downgrade_database(config, steps=args.steps, revision=args.revision, assume_yes=args.yes)
    elif args.command == "verify":
        return 0 if verify_migrations(config) else 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
