#!/usr/bin/env python3
"""
Initialize the database: run migrations, then seed an empty people table.

Usage:
    python scripts/init_db.py
    python scripts/init_db.py --no-seed
"""
import argparse
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from backend.database import engine  # noqa: E402
from backend.services.bootstrap import initialize_database  # noqa: E402
from backend.utils.logging import setup_logging  # noqa: E402


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Initialize the people database")
    parser.add_argument("--no-seed", action="store_true", help="Skip seeding mock people")
    args = parser.parse_args(argv)

    setup_logging()
    print("🔨 Initializing database...")
    print(f"📍 Database URL: {engine.url}")
    try:
        summary = initialize_database(engine, seed=False if args.no_seed else None)
    except Exception as e:
        print(f"❌ Database initialization failed: {e}")
        return 1

    if summary["seeded"]:
        print(f"🌱 Seeded {summary['seeded']} people")
    print("✅ Database initialized successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
