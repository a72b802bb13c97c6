"""API route modules.

All endpoints organized by domain:
- health.py: liveness and database reachability
- people.py: people CRUD

Each module exports a tuple of ``RouteContract``; ``build_router`` validates
the combined table and registers it.
"""

from collections.abc import Sequence

from fastapi import APIRouter

from ..contracts import RouteContract, register_routes
from .health import HEALTH_ROUTES
from .people import PEOPLE_ROUTES

ROUTE_TABLE: tuple[RouteContract, ...] = HEALTH_ROUTES + PEOPLE_ROUTES


def build_router(contracts: Sequence[RouteContract] = ROUTE_TABLE) -> APIRouter:
    """Build an APIRouter serving exactly ``contracts``."""
    router = APIRouter()
    register_routes(router, contracts)
    return router


__all__ = ["HEALTH_ROUTES", "PEOPLE_ROUTES", "ROUTE_TABLE", "build_router"]
