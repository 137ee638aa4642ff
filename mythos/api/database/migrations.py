"""Schema versions for persisted collections.

Version 1 is the original format: a bare JSON array of items.
Version 2 wraps the array in an envelope: {"version": 2, "items": [...]}.
Each migration step takes the previous version's payload and returns the next.
"""

import logging
from typing import Any, Callable

from mythos.config import STUDIO_CONSTANTS
from mythos.core.errors import StorageError

logger = logging.getLogger(__name__)

CURRENT_VERSION = STUDIO_CONSTANTS["storage_schema_version"]


def _v1_to_v2(payload: Any) -> dict:
    if not isinstance(payload, list):
        raise StorageError("Version 1 payload must be a JSON array")
    items = [item for item in payload if isinstance(item, dict)]
    dropped = len(payload) - len(items)
    if dropped:
        logger.warning("Dropped %d non-object entries during migration", dropped)
    return {"version": 2, "items": items}


MIGRATIONS: dict[int, Callable[[Any], dict]] = {
    1: _v1_to_v2,
}


def detect_version(payload: Any) -> int:
    if isinstance(payload, list):
        return 1
    if isinstance(payload, dict) and isinstance(payload.get("version"), int):
        return payload["version"]
    raise StorageError("Unrecognised collection payload")


def migrate(payload: Any) -> dict:
    """
    Upgrade a decoded payload to the current envelope.

    Raises:
        StorageError: Unknown shape, or a version newer than this code
    """
    version = detect_version(payload)
    if version > CURRENT_VERSION:
        raise StorageError(f"Collection version {version} is newer than supported {CURRENT_VERSION}")

    while version < CURRENT_VERSION:
        payload = MIGRATIONS[version](payload)
        logger.info("Migrated collection from version %d to %d", version, payload["version"])
        version = payload["version"]

    if not isinstance(payload.get("items"), list):
        raise StorageError("Collection envelope has no items array")
    return payload


def envelope(items: list[dict]) -> dict:
    return {"version": CURRENT_VERSION, "items": items}
