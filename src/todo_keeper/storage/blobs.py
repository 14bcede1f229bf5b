# src/todo_keeper/storage/blobs.py

"""
Whole-collection JSON blobs on top of a KeyValueStore.

Every collection (accounts, tasks, session) lives under one fixed key and is
rewritten in full on each mutation. Storage failures and undecodable blobs
surface as StorageUnavailable; nothing here retries.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from ..core.errors import StorageUnavailable
from ..core.ports import KeyValueStore

logger = logging.getLogger(__name__)

ACCOUNTS_KEY = "accounts"
TASKS_KEY = "tasks"
SESSION_KEY = "session"


async def read_raw(kv: KeyValueStore, key: str) -> str | None:
    try:
        return await kv.get_string(key)
    except Exception as e:
        logger.exception("kv read failed key=%s", key)
        raise StorageUnavailable() from e


async def write_raw(kv: KeyValueStore, key: str, value: str) -> None:
    try:
        await kv.set_string(key, value)
    except Exception as e:
        logger.exception("kv write failed key=%s", key)
        raise StorageUnavailable() from e


async def read_json(kv: KeyValueStore, key: str, expected: type) -> Any:
    """
    Load the blob under `key`.

    Missing or empty -> a fresh `expected()` (empty list/dict).
    Present but not JSON of the expected shape -> StorageUnavailable, so a
    corrupt blob is never silently overwritten with an empty collection.
    """
    raw = await read_raw(kv, key)
    if not raw:
        return expected()
    try:
        val = json.loads(raw)
    except ValueError as e:
        logger.error("kv blob is not valid JSON key=%s", key)
        raise StorageUnavailable(f"Stored data under {key!r} is corrupt.") from e
    if not isinstance(val, expected):
        logger.error("kv blob has unexpected shape key=%s type=%s", key, type(val).__name__)
        raise StorageUnavailable(f"Stored data under {key!r} is corrupt.")
    return val


async def write_json(kv: KeyValueStore, key: str, value: Any) -> None:
    await write_raw(kv, key, json.dumps(value, ensure_ascii=False))
