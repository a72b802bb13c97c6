"""
Services Module
===============

Application services that sit outside the request path.

Active Services:
- bootstrap.py: migrations and first-run seed data
"""

from .bootstrap import initialize_database, run_migrations, seed_people

__all__ = ["initialize_database", "run_migrations", "seed_people"]
