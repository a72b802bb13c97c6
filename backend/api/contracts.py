"""
Route Contracts
===============

Every HTTP operation is declared once, as a ``RouteContract``: its path and
method, the handler, the success status and response schema, and the error
statuses it can produce. The router, the OpenAPI document and the generated
TypeScript client are all derived from this table, so an operation cannot be
served without also being documented.

``validate_route_table`` runs at router build time and refuses tables that
omit an error status the operation kind can produce.
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from http import HTTPStatus
from typing import Any

from fastapi import Response

from ..schemas.common import ErrorResponse


class RouteKind(str, Enum):
    """What a route does to its entity; decides its mandatory statuses."""

    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    PROBE = "probe"


SUCCESS_STATUS: dict[RouteKind, int] = {
    RouteKind.LIST: 200,
    RouteKind.GET: 200,
    RouteKind.CREATE: 201,
    RouteKind.UPDATE: 200,
    RouteKind.DELETE: 204,
    RouteKind.PROBE: 200,
}

# Error statuses each kind can produce; 500 covers an unreachable store
REQUIRED_ERROR_STATUSES: dict[RouteKind, frozenset[int]] = {
    RouteKind.LIST: frozenset({400, 500}),
    RouteKind.GET: frozenset({400, 404, 500}),
    RouteKind.CREATE: frozenset({400, 500}),
    RouteKind.UPDATE: frozenset({400, 404, 500}),
    RouteKind.DELETE: frozenset({400, 404, 500}),
    RouteKind.PROBE: frozenset(),
}

ERROR_DESCRIPTIONS = {
    400: "Invalid input, malformed id or uniqueness conflict",
    404: "No record exists for the given id",
    500: "Unexpected failure or database unavailable",
}


class RouteTableError(ValueError):
    """Raised when the route table is inconsistent."""


@dataclass(frozen=True)
class RouteContract:
    """Declaration of one HTTP operation."""

    path: str
    method: str
    endpoint: Callable[..., Any]
    kind: RouteKind
    operation_id: str
    summary: str
    response_model: type | None = None
    error_statuses: frozenset[int] = frozenset()
    description: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)

    @property
    def success_status(self) -> int:
        return SUCCESS_STATUS[self.kind]

    def responses(self) -> dict[int | str, dict[str, Any]]:
        """OpenAPI ``responses`` entries for the declared error statuses."""
        return {
            status: {
                "model": ErrorResponse,
                "description": ERROR_DESCRIPTIONS.get(status, HTTPStatus(status).phrase),
            }
            for status in sorted(self.error_statuses)
        }


def validate_route_table(contracts: Iterable[RouteContract]) -> list[RouteContract]:
    """Check a route table and return it as a list.

    Raises:
        RouteTableError: listing every problem found
    """
    contracts = list(contracts)
    problems = []
    seen: set[tuple[str, str]] = set()
    operation_ids: set[str] = set()

    for contract in contracts:
        name = f"{contract.method} {contract.path}"
        key = (contract.method.upper(), contract.path)
        if key in seen:
            problems.append(f"{name}: declared more than once")
        seen.add(key)

        if contract.operation_id in operation_ids:
            problems.append(f"{name}: duplicate operation id {contract.operation_id!r}")
        operation_ids.add(contract.operation_id)

        missing = REQUIRED_ERROR_STATUSES[contract.kind] - contract.error_statuses
        if missing:
            problems.append(
                f"{name}: missing error status(es) {', '.join(map(str, sorted(missing)))}"
            )

        success_family = [s for s in contract.error_statuses if s < 400]
        if success_family:
            problems.append(
                f"{name}: non-error status(es) {sorted(success_family)} declared as errors"
            )

        if contract.success_status == 204 and contract.response_model is not None:
            problems.append(f"{name}: 204 responses carry no body")
        if contract.success_status != 204 and contract.response_model is None:
            problems.append(f"{name}: response schema required")

    if problems:
        raise RouteTableError("Invalid route table:\n  " + "\n  ".join(problems))
    return contracts


def register_routes(router, contracts: Sequence[RouteContract]) -> None:
    """Add every contract to ``router`` after validating the table."""
    for contract in validate_route_table(contracts):
        extra: dict[str, Any] = {}
        if contract.success_status == 204:
            extra["response_class"] = Response
        router.add_api_route(
            contract.path,
            contract.endpoint,
            methods=[contract.method.upper()],
            status_code=contract.success_status,
            response_model=contract.response_model,
            responses=contract.responses(),
            summary=contract.summary,
            description=contract.description,
            operation_id=contract.operation_id,
            tags=list(contract.tags),
            **extra,
        )


__all__ = [
    "ERROR_DESCRIPTIONS",
    "REQUIRED_ERROR_STATUSES",
    "SUCCESS_STATUS",
    "RouteContract",
    "RouteKind",
    "RouteTableError",
    "register_routes",
    "validate_route_table",
]
