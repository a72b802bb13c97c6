"""Health check endpoint."""

import time

from fastapi import Request

from ...database import check_connection
from ...models import utcnow
from ...schemas import HealthResponse
from ..contracts import RouteContract, RouteKind


def health_check(request: Request) -> HealthResponse:
    """Liveness and database reachability. Always 200."""
    state = request.app.state
    connected = check_connection(state.db_engine)
    return HealthResponse(
        timestamp=utcnow(),
        uptime=round(time.monotonic() - state.started_at, 3),
        database="connected" if connected else "disconnected",
    )


HEALTH_ROUTES = (
    RouteContract(
        path="/health",
        method="GET",
        endpoint=health_check,
        kind=RouteKind.PROBE,
        operation_id="healthCheck",
        summary="Health check",
        response_model=HealthResponse,
        tags=("health",),
    ),
)

__all__ = ["HEALTH_ROUTES", "health_check"]
