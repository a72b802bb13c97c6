"""
Export the OpenAPI document and the TypeScript client.

Usage:
    python -m backend.schemas.generated.export_schemas
    python -m backend.schemas.generated.export_schemas --check

``--check`` writes nothing and exits 1 when either file on disk differs from
what the current routes would generate.
"""

import argparse
import logging
import sys
from pathlib import Path

from fastapi import FastAPI

from ...api.documentation import build_openapi, render_openapi
from . import OPENAPI_OUTPUT, TYPESCRIPT_OUTPUT
from .typescript import generate_typescript

logger = logging.getLogger(__name__)


def _default_app() -> FastAPI:
    from ...api.main import app

    return app


def render_artifacts(app: FastAPI | None = None) -> tuple[str, str]:
    """Return (openapi.json text, api-types.ts text) for ``app``."""
    document = build_openapi(app or _default_app())
    return render_openapi(document), generate_typescript(document)


def _write(path: Path, content: str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def export_openapi(path: Path | str = OPENAPI_OUTPUT, app: FastAPI | None = None) -> Path:
    """Write the OpenAPI document to ``path``."""
    openapi_text, _ = render_artifacts(app)
    return _write(Path(path), openapi_text)


def export_typescript(
    path: Path | str = TYPESCRIPT_OUTPUT, app: FastAPI | None = None
) -> Path:
    """Write the TypeScript declarations and client to ``path``."""
    _, typescript_text = render_artifacts(app)
    return _write(Path(path), typescript_text)


def stale_outputs(
    openapi_path: Path, types_path: Path, app: FastAPI | None = None
) -> list[Path]:
    """Paths whose content differs from a fresh generation."""
    openapi_text, typescript_text = render_artifacts(app)
    stale = []
    for path, expected in ((openapi_path, openapi_text), (types_path, typescript_text)):
        path = Path(path)
        if not path.exists() or path.read_text(encoding="utf-8") != expected:
            stale.append(path)
    return stale


def main(argv: list[str] | None = None, app: FastAPI | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate openapi.json and TypeScript client types"
    )
    parser.add_argument("--openapi-out", type=Path, default=OPENAPI_OUTPUT)
    parser.add_argument("--types-out", type=Path, default=TYPESCRIPT_OUTPUT)
    parser.add_argument(
        "--check",
        action="store_true",
        help="Exit 1 if the files on disk are out of date; write nothing",
    )
    args = parser.parse_args(argv)

    if args.check:
        stale = stale_outputs(args.openapi_out, args.types_out, app)
        for path in stale:
            print(f"❌ Out of date: {path}")
        if stale:
            print("Run: python -m backend.schemas.generated.export_schemas")
            return 1
        print("✅ Generated files are up to date")
        return 0

    openapi_text, typescript_text = render_artifacts(app)
    openapi_path = _write(args.openapi_out, openapi_text)
    types_path = _write(args.types_out, typescript_text)
    logger.info(f"Exported {openapi_path} and {types_path}")
    print(f"✅ OpenAPI spec generated at: {openapi_path}")
    print(f"✅ TypeScript types generated at: {types_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
