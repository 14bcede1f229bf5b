# src/todo_keeper/tasks/task_notifier.py

from __future__ import annotations

"""
Binding between task deadlines and the notification scheduler.

Past-due policy: a deadline that is not strictly in the future (beyond
min_lead_seconds) is silently skipped; no scheduler call is made.

Failure policy: a scheduler error never fails the task operation. The task is
saved without a handle and a NotificationSchedulingFailed warning is emitted.

Cancellation is best-effort: it races with delivery, so already-fired or
unknown handles are not errors.
"""

import logging
import time
import warnings

from ..core.errors import NotificationSchedulingFailed
from ..core.ports import Clock, NotificationScheduler

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Task reminder"


class TaskNotifier:
    def __init__(
        self,
        scheduler: NotificationScheduler,
        *,
        clock: Clock = time.time,
        title: str = DEFAULT_TITLE,
        min_lead_seconds: float = 0.0,
    ) -> None:
        self._scheduler = scheduler
        self._clock = clock
        self._title = title
        self._min_lead = max(0.0, float(min_lead_seconds))

    async def schedule(self, text: str, when: float) -> str | None:
        seconds_until = float(when) - self._clock()
        if seconds_until <= self._min_lead:
            logger.debug("Reminder skipped (past due) seconds_until=%.1f", seconds_until)
            return None

        try:
            handle = await self._scheduler.schedule_one_shot(self._title, text, seconds_until)
        except Exception as e:
            logger.warning("Reminder scheduling failed: %s", e)
            warnings.warn(
                f"Reminder could not be scheduled: {e}",
                NotificationSchedulingFailed,
                stacklevel=2,
            )
            return None

        logger.debug("Reminder scheduled handle=%s in=%.1fs", handle, seconds_until)
        return handle

    async def cancel(self, handle: str | None) -> None:
        if not handle:
            return
        try:
            await self._scheduler.cancel(handle)
        except Exception:
            logger.debug("Reminder cancel ignored handle=%s", handle, exc_info=True)
