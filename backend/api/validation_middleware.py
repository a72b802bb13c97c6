"""
Request Validation Handling
===========================

Turns request validation failures (body, query string or path) into the
shared ``{"error", "message"}`` body with status 400. No route handler runs
for a request that fails here.
"""

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..core.exceptions import BAD_REQUEST
from ..utils.logging import get_logger

logger = get_logger(__name__)

# Longest offending value echoed back in a message
_MAX_VALUE_LENGTH = 100


class ValidationErrorDetail:
    """Structured validation error detail."""

    def __init__(
        self,
        location: str,
        field: str,
        message: str,
        error_type: str,
        constraint: str | None = None,
    ):
        self.location = location
        self.field = field
        self.message = message
        self.error_type = error_type
        self.constraint = constraint

    def to_dict(self) -> dict[str, Any]:
        result = {
            "location": self.location,
            "field": self.field,
            "message": self.message,
            "type": self.error_type,
        }
        if self.constraint:
            result["constraint"] = self.constraint
        return result

    def __str__(self) -> str:
        if self.field:
            return f"{self.location}/{self.field} {self.message}"
        return f"{self.location} {self.message}"


def parse_pydantic_errors(errors: list[dict[str, Any]]) -> list[ValidationErrorDetail]:
    """Parse Pydantic validation errors into structured format."""
    details = []

    for error in errors:
        loc = list(error.get("loc", []))
        location = str(loc.pop(0)) if loc and loc[0] in ("body", "query", "path") else "request"
        field = ".".join(str(part) for part in loc)

        msg = error.get("msg", "Invalid value")
        error_type = error.get("type", "value_error")

        constraint = None
        ctx = error.get("ctx") or {}
        for key in ("ge", "le", "gt", "lt", "min_length", "max_length", "pattern"):
            if key in ctx:
                constraint = f"{key}: {str(ctx[key])[:_MAX_VALUE_LENGTH]}"
                break

        details.append(
            ValidationErrorDetail(
                location=location,
                field=field,
                message=msg[0].lower() + msg[1:] if msg else msg,
                error_type=error_type,
                constraint=constraint,
            )
        )

    return details


def format_validation_message(details: list[ValidationErrorDetail]) -> str:
    """One-line summary of every validation failure."""
    if not details:
        return "Request validation failed"
    return "; ".join(str(d) for d in details)


def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle FastAPI request validation errors as 400 Bad Request."""
    errors = parse_pydantic_errors(exc.errors())

    logger.info(
        "Validation error on %s %s: %d error(s) %s",
        request.method,
        request.url.path,
        len(errors),
        [e.to_dict() for e in errors[:5]],
    )

    return JSONResponse(
        status_code=400,
        content={"error": BAD_REQUEST, "message": format_validation_message(errors)},
    )


def register_validation_handlers(app) -> None:
    """
    Register validation exception handlers with FastAPI app.

    Usage:
        from backend.api.validation_middleware import register_validation_handlers
        register_validation_handlers(app)
    """
    app.add_exception_handler(RequestValidationError, validation_exception_handler)


__all__ = [
    "ValidationErrorDetail",
    "format_validation_message",
    "parse_pydantic_errors",
    "register_validation_handlers",
    "validation_exception_handler",
]
