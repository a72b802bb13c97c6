"""
API Documentation

Publishes the OpenAPI document derived from the route table. The document is
built once per app and rendered deterministically: the same routes and
schemas always produce byte-identical JSON.
"""

import json
from pathlib import Path
from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from ..core.config import settings

TAGS_METADATA = [
    {"name": "health", "description": "Health check endpoints"},
    {"name": "people", "description": "People directory"},
]

# Emitted by FastAPI for every route with parameters; validation failures
# are answered with 400 and the shared error body instead
_FRAMEWORK_VALIDATION_STATUS = "422"
_FRAMEWORK_VALIDATION_SCHEMAS = ("HTTPValidationError", "ValidationError")


def _strip_framework_validation(document: dict[str, Any]) -> None:
    for operations in document.get("paths", {}).values():
        for operation in operations.values():
            if isinstance(operation, dict):
                operation.get("responses", {}).pop(_FRAMEWORK_VALIDATION_STATUS, None)

    schemas = document.get("components", {}).get("schemas", {})
    for name in _FRAMEWORK_VALIDATION_SCHEMAS:
        schemas.pop(name, None)
    if "components" in document and not schemas:
        document["components"].pop("schemas", None)


def build_openapi(app: FastAPI) -> dict[str, Any]:
    """
    Generate the OpenAPI document for ``app``.

    Args:
        app: FastAPI application

    Returns:
        OpenAPI schema dictionary
    """
    document = get_openapi(
        title=app.title,
        version=app.version,
        openapi_version=app.openapi_version,
        description=app.description,
        routes=app.routes,
        tags=TAGS_METADATA,
        servers=[{"url": settings.SERVER_URL, "description": "Development server"}],
        separate_input_output_schemas=False,
    )
    _strip_framework_validation(document)
    return document


def custom_openapi_schema(app: FastAPI) -> dict[str, Any]:
    """Cached ``build_openapi`` for the docs UI and ``/openapi.json``."""
    if app.openapi_schema:
        return app.openapi_schema
    app.openapi_schema = build_openapi(app)
    return app.openapi_schema


def configure_api_docs(app: FastAPI) -> None:
    """
    Configure API documentation.

    Args:
        app: FastAPI application
    """
    app.openapi = lambda: custom_openapi_schema(app)
    app.swagger_ui_parameters = {
        "docExpansion": "list",
        "deepLinking": False,
        "displayRequestDuration": True,
    }


def render_openapi(document: dict[str, Any]) -> str:
    """Serialize an OpenAPI document with stable key order."""
    return json.dumps(document, indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def export_openapi(app: FastAPI, path: Path | str) -> Path:
    """Write the OpenAPI document of ``app`` to ``path``."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_openapi(build_openapi(app)), encoding="utf-8")
    return path


__all__ = [
    "TAGS_METADATA",
    "build_openapi",
    "configure_api_docs",
    "custom_openapi_schema",
    "export_openapi",
    "render_openapi",
]
