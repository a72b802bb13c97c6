"""
Generated client artefacts.

This module provides the infrastructure for contract-first API development:
1. Pydantic models define the single source of truth
2. The OpenAPI document is derived from the route table and those models
3. TypeScript types and a fetch client are projected from the OpenAPI document

Usage:
    python -m backend.schemas.generated.export_schemas
"""

from ...core.config import settings
from .typescript import TypeScriptProjector, generate_typescript

TYPESCRIPT_OUTPUT = settings.TYPESCRIPT_OUTPUT
OPENAPI_OUTPUT = settings.OPENAPI_OUTPUT

__all__ = ["OPENAPI_OUTPUT", "TYPESCRIPT_OUTPUT", "TypeScriptProjector", "generate_typescript"]
