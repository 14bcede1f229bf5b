# src/todo_keeper/core/session.py

from __future__ import annotations

import logging

from ..storage.blobs import SESSION_KEY, read_raw, write_raw
from .ports import KeyValueStore

logger = logging.getLogger(__name__)


class SessionState:
    """
    Persisted "who is logged in" marker.

    Only the front-end reads this; core operations always receive the
    username explicitly. Clearing writes an empty string (the store has no
    delete), which reads back as None.
    """

    def __init__(self, kv: KeyValueStore) -> None:
        self._kv = kv

    async def set_current(self, username: str | None) -> None:
        await write_raw(self._kv, SESSION_KEY, username or "")
        logger.info("Session %s", f"set user={username}" if username else "cleared")

    async def get_current(self) -> str | None:
        raw = await read_raw(self._kv, SESSION_KEY)
        return raw or None
