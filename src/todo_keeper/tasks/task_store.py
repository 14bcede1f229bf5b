# src/todo_keeper/tasks/task_store.py

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

from ..core.errors import DeadlineNotFuture, EmptyText, NoActiveSession, NotFound, StorageUnavailable
from ..core.ports import Clock, KeyValueStore
from ..storage.blobs import TASKS_KEY, read_json, write_json
from .task_models import Task, TaskFilter
from .task_notifier import TaskNotifier

logger = logging.getLogger(__name__)


class TaskStore:
    """
    Per-user ordered task collections.

    Layout: one JSON object under TASKS_KEY, {username: [task records...]}.
    Every mutation is read-modify-write of the whole blob and persists once,
    at the end. Mutations are serialized with an asyncio.Lock; without it two
    interleaved callers would lose each other's writes.

    The owner is always passed explicitly; the store never looks up a
    "current user".
    """

    def __init__(self, kv: KeyValueStore, notifier: TaskNotifier, *, clock: Clock = time.time) -> None:
        self._kv = kv
        self._notifier = notifier
        self._clock = clock
        self._lock = asyncio.Lock()

    # ---- low-level helpers ----

    @staticmethod
    def _require_user(username: str) -> None:
        if not username:
            raise NoActiveSession()

    async def _load_all(self) -> dict[str, list[dict[str, Any]]]:
        return await read_json(self._kv, TASKS_KEY, dict)

    async def _save_all(self, data: dict[str, list[dict[str, Any]]]) -> None:
        await write_json(self._kv, TASKS_KEY, data)

    @staticmethod
    def _decode(rows: Any) -> list[Task]:
        if not isinstance(rows, list):
            return []
        out: list[Task] = []
        for rec in rows:
            if isinstance(rec, dict) and rec.get("id") is not None:
                out.append(Task.from_record(rec))
        return out

    @staticmethod
    def _encode(tasks: list[Task]) -> list[dict[str, Any]]:
        return [t.to_record() for t in tasks]

    @staticmethod
    def _index_of(tasks: list[Task], task_id: str) -> int:
        for i, t in enumerate(tasks):
            if t.id == task_id:
                return i
        raise NotFound("Task", task_id)

    def _validate(self, text: str, deadline: float) -> str:
        clean = (text or "").strip()
        if not clean:
            raise EmptyText()
        if float(deadline) <= self._clock():
            raise DeadlineNotFuture()
        return clean

    def _new_id(self, tasks: list[Task]) -> str:
        taken = {t.id for t in tasks}
        n = int(self._clock() * 1000)
        while str(n) in taken:
            n += 1
        return str(n)

    # ---- read side ----

    async def list(self, username: str) -> list[Task]:
        self._require_user(username)
        data = await self._load_all()
        return self._decode(data.get(username))

    async def filter(self, username: str, which: TaskFilter | str = TaskFilter.ALL) -> list[Task]:
        flt = which if isinstance(which, TaskFilter) else TaskFilter.parse(which)
        return [t for t in await self.list(username) if flt.matches(t)]

    async def get(self, username: str, task_id: str) -> Task:
        tasks = await self.list(username)
        return tasks[self._index_of(tasks, task_id)]

    # ---- mutations ----

    async def create(self, username: str, text: str, deadline: float) -> Task:
        self._require_user(username)
        clean = self._validate(text, deadline)

        async with self._lock:
            data = await self._load_all()
            tasks = self._decode(data.get(username))

            handle = await self._notifier.schedule(clean, deadline)
            task = Task(
                id=self._new_id(tasks),
                text=clean,
                deadline=float(deadline),
                completed=False,
                notification_id=handle,
                created_at=self._clock(),
            )
            tasks.append(task)
            data[username] = self._encode(tasks)
            try:
                await self._save_all(data)
            except StorageUnavailable:
                await self._notifier.cancel(handle)
                raise

        logger.info("Task created user=%s id=%s reminder=%s", username, task.id, handle is not None)
        return task

    async def update(self, username: str, task_id: str, text: str, deadline: float) -> Task:
        self._require_user(username)

        async with self._lock:
            data = await self._load_all()
            tasks = self._decode(data.get(username))
            idx = self._index_of(tasks, task_id)
            clean = self._validate(text, deadline)
            old = tasks[idx]

            handle = await self._notifier.schedule(clean, deadline)
            task = Task(
                id=old.id,
                text=clean,
                deadline=float(deadline),
                completed=old.completed,
                notification_id=handle,
                created_at=old.created_at,
            )
            tasks[idx] = task
            data[username] = self._encode(tasks)
            try:
                await self._save_all(data)
            except StorageUnavailable:
                # Stored task still points at the old reminder; keep it live.
                await self._notifier.cancel(handle)
                raise
            await self._notifier.cancel(old.notification_id)

        logger.info("Task updated user=%s id=%s reminder=%s", username, task.id, handle is not None)
        return task

    async def toggle_completed(self, username: str, task_id: str) -> Task:
        self._require_user(username)

        async with self._lock:
            data = await self._load_all()
            tasks = self._decode(data.get(username))
            idx = self._index_of(tasks, task_id)
            old = tasks[idx]
            task = Task(
                id=old.id,
                text=old.text,
                deadline=old.deadline,
                completed=not old.completed,
                notification_id=old.notification_id,
                created_at=old.created_at,
            )
            tasks[idx] = task
            data[username] = self._encode(tasks)
            await self._save_all(data)

        logger.debug("Task toggled user=%s id=%s completed=%s", username, task.id, task.completed)
        return task

    async def delete(self, username: str, task_id: str) -> None:
        self._require_user(username)

        async with self._lock:
            data = await self._load_all()
            tasks = self._decode(data.get(username))
            idx = self._index_of(tasks, task_id)
            removed = tasks.pop(idx)

            data[username] = self._encode(tasks)
            await self._save_all(data)
            await self._notifier.cancel(removed.notification_id)

        logger.info("Task deleted user=%s id=%s", username, task_id)

    async def delete_all_for_user(self, username: str) -> None:
        """Cascade used by account removal. No-op for users without tasks."""
        self._require_user(username)

        async with self._lock:
            data = await self._load_all()
            if username not in data:
                return
            tasks = self._decode(data.pop(username))

            await self._save_all(data)
            for t in tasks:
                await self._notifier.cancel(t.notification_id)

        logger.info("All tasks deleted user=%s count=%d", username, len(tasks))

    async def resync_notifications(self, username: str) -> int:
        """
        Re-arm reminders after a process restart.

        Handles persisted by a previous run refer to timers that no longer
        exist. Schedule fresh reminders for every task whose deadline is still
        ahead, then cancel the old handles (best-effort) once the new ones are
        saved. Returns the number of live reminders.
        """
        self._require_user(username)

        async with self._lock:
            data = await self._load_all()
            if username not in data:
                return 0
            tasks = self._decode(data.get(username))

            live = 0
            refreshed: list[Task] = []
            for t in tasks:
                handle = await self._notifier.schedule(t.text, t.deadline)
                if handle is not None:
                    live += 1
                refreshed.append(
                    Task(
                        id=t.id,
                        text=t.text,
                        deadline=t.deadline,
                        completed=t.completed,
                        notification_id=handle,
                        created_at=t.created_at,
                    )
                )
            data[username] = self._encode(refreshed)
            try:
                await self._save_all(data)
            except StorageUnavailable:
                for t in refreshed:
                    await self._notifier.cancel(t.notification_id)
                raise
            for t in tasks:
                await self._notifier.cancel(t.notification_id)

        logger.info("Reminders resynced user=%s live=%d", username, live)
        return live
