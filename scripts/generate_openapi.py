#!/usr/bin/env python3
"""
Write openapi.json from the registered routes.

Usage:
    python scripts/generate_openapi.py [--out PATH]
"""
import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from backend.core.config import settings  # noqa: E402
from backend.schemas.generated.export_schemas import export_openapi  # noqa: E402


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Generate the OpenAPI document")
    parser.add_argument("--out", type=Path, default=settings.OPENAPI_OUTPUT)
    args = parser.parse_args(argv)

    path = export_openapi(args.out)
    print(f"✅ OpenAPI spec generated at: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
