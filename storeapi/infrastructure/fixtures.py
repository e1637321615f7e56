"""Fixture Loader — reads the static JSON seed file for in-memory stores.

The file is a JSON object keyed by resource plural:
    {"products": [...], "users": [...]}

A missing file yields empty collections (logged); a malformed file is fatal at start-up.
"""

import json
import logging
from pathlib import Path

from storeapi.core.domain_types import Record

logger = logging.getLogger(__name__)


def load_fixture(path: str | Path) -> dict[str, list[Record]]:
    """Load seed records, keyed by resource plural."""
    fixture_path = Path(path)
    if not fixture_path.is_file():
        logger.warning(f"Fixture file {fixture_path} not found, starting empty")
        return {}
    with fixture_path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Fixture {fixture_path} must contain a JSON object")
    collections: dict[str, list[Record]] = {}
    for name, records in data.items():
        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            raise ValueError(f"Fixture key '{name}' must be a list of objects")
        collections[name] = records
    logger.info(
        f"Loaded fixture {fixture_path}: "
        + ", ".join(f"{k}={len(v)}" for k, v in collections.items()),
    )
    return collections
