"""Warm the reference cache for one owner namespace.

Loads definitions from a JSON file ({"<name>": {"table": ..., "namespace": ...,
"key_field": ..., "source_property": ..., "filter_condition": {...}}}) and
bootstraps them: namespaces already cached are skipped, the rest are fetched
from the database and written through to the cache store.

Usage:
    uv run python -m scripts.warm_reference_cache <owner_namespace> <definitions.json>

Requires: DATABASE_URL; Redis settings (or REDIS_ENABLED=false for a dry run).
Exit code 1 when any definition failed.
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from refcache.core.lifespan import create_runtime
from refcache.domain.exceptions import TableSourceNotConfiguredException
from refcache.shared.telemetry.logging import setup_logging


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees DATABASE_* when run as script."""
    load_dotenv(_project_root() / ".env", override=True)


def _load_definitions(path: Path) -> dict:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object of definitions")
    return data


async def main() -> None:
    """Bootstrap owner_namespace with the definitions file."""
    if len(sys.argv) < 3:
        print(
            "Usage: uv run python -m scripts.warm_reference_cache "
            "<owner_namespace> <definitions.json>",
            file=sys.stderr,
        )
        sys.exit(1)
    owner_namespace = sys.argv[1]
    definitions_path = Path(sys.argv[2])

    _load_env()
    setup_logging()
    try:
        definitions = _load_definitions(definitions_path)
    except (OSError, ValueError) as e:
        print(f"Could not read definitions: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        async with create_runtime() as cache:
            result = await cache.initialize(owner_namespace, definitions)
    except TableSourceNotConfiguredException as e:
        print(e.message, file=sys.stderr)
        sys.exit(1)

    print(f"Owner key: {result.owner_key}")
    for name in result.populated:
        print(f"  populated  {name}")
    for name in result.skipped:
        print(f"  cached     {name}")
    for name in result.unpersisted:
        print(f"  not saved  {name}")
    for failure in result.failed:
        print(f"  FAILED     {failure.name}: [{failure.error_code}] {failure.error.message}")
    if not result.ok:
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
