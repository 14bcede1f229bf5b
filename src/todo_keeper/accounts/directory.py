# src/todo_keeper/accounts/directory.py

from __future__ import annotations

import asyncio
import logging
import time

from passlib.context import CryptContext

from ..core.errors import DuplicateUsername, InvalidCredentials, InvalidUsername, NotFound
from ..core.ports import Clock, KeyValueStore
from ..storage.blobs import ACCOUNTS_KEY, read_json, write_json
from ..tasks.task_store import TaskStore
from .credentials import build_password_context, validate_password, verify_digest
from .models import Account

logger = logging.getLogger(__name__)


class AccountDirectory:
    """
    username -> Account, persisted as one ordered list under ACCOUNTS_KEY.

    Usernames are matched exactly (case-sensitive, no trimming).
    Deleting an account cascades to the owner's tasks via TaskStore.
    """

    def __init__(
        self,
        kv: KeyValueStore,
        task_store: TaskStore,
        *,
        clock: Clock = time.time,
        password_context: CryptContext | None = None,
    ) -> None:
        self._kv = kv
        self._tasks = task_store
        self._clock = clock
        self._pwd = password_context or build_password_context()
        self._lock = asyncio.Lock()

    async def _load(self) -> list[Account]:
        rows = await read_json(self._kv, ACCOUNTS_KEY, list)
        out: list[Account] = []
        for rec in rows:
            if isinstance(rec, dict) and rec.get("username"):
                out.append(Account.from_record(rec))
        return out

    async def _save(self, accounts: list[Account]) -> None:
        await write_json(self._kv, ACCOUNTS_KEY, [a.to_record() for a in accounts])

    # ---- public API ----

    async def list_accounts(self) -> list[Account]:
        return await self._load()

    async def get(self, username: str) -> Account | None:
        for acc in await self._load():
            if acc.username == username:
                return acc
        return None

    async def exists(self, username: str) -> bool:
        return await self.get(username) is not None

    async def register(self, username: str, password: str) -> Account:
        if not username or not username.strip():
            raise InvalidUsername()
        validate_password(password)

        async with self._lock:
            accounts = await self._load()
            if any(a.username == username for a in accounts):
                raise DuplicateUsername(username)

            digest = await asyncio.to_thread(self._pwd.hash, password)
            account = Account(username=username, credential_digest=digest, created_at=self._clock())
            accounts.append(account)
            await self._save(accounts)

        logger.info("Account registered username=%s total=%d", username, len(accounts))
        return account

    async def authenticate(self, username: str, password: str) -> Account:
        account = await self.get(username) if username else None
        if account is None:
            # Same cost as a real check so timing does not reveal unknown usernames.
            await asyncio.to_thread(self._pwd.dummy_verify)
            logger.info("Authentication failed")
            raise InvalidCredentials()

        ok = await asyncio.to_thread(verify_digest, self._pwd, password or "", account.credential_digest)
        if not ok:
            logger.info("Authentication failed")
            raise InvalidCredentials()

        logger.debug("Authenticated username=%s", username)
        return account

    async def delete_account(self, username: str) -> None:
        """
        Remove the account and every task it owns.

        Tasks go first: if the account write then fails, the account is left
        with an empty task list rather than orphaned tasks without an owner.
        """
        async with self._lock:
            accounts = await self._load()
            remaining = [a for a in accounts if a.username != username]
            if len(remaining) == len(accounts):
                raise NotFound("Account", username)

            await self._tasks.delete_all_for_user(username)
            await self._save(remaining)

        logger.info("Account deleted username=%s", username)
