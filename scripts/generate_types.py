#!/usr/bin/env python3
"""
Write the TypeScript declarations and fetch client from the OpenAPI document.

Usage:
    python scripts/generate_types.py [--out PATH] [--from-openapi openapi.json]

With ``--from-openapi`` the types are projected from an existing document
instead of the live routes.
"""
import argparse
import json
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from backend.core.config import settings  # noqa: E402
from backend.schemas.generated.export_schemas import export_typescript  # noqa: E402
from backend.schemas.generated.typescript import generate_typescript  # noqa: E402


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Generate TypeScript client types")
    parser.add_argument("--out", type=Path, default=settings.TYPESCRIPT_OUTPUT)
    parser.add_argument("--from-openapi", type=Path, default=None)
    args = parser.parse_args(argv)

    if args.from_openapi:
        document = json.loads(args.from_openapi.read_text(encoding="utf-8"))
        args.out.parent.mkdir(parents=True, exist_ok=True)
        args.out.write_text(generate_typescript(document), encoding="utf-8")
        path = args.out
    else:
        path = export_typescript(args.out)
    print(f"✅ TypeScript types generated at: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
