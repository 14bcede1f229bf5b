# src/todo_keeper/notifications/local_scheduler.py

from __future__ import annotations

"""
In-process notification scheduler.

Each reminder is an asyncio task that sleeps until its deadline and then
delivers "<title>: <body>" through an injected messenger port. Timers live
only as long as the event loop; TaskStore.resync_notifications() re-arms them
after a restart.

To stop all pending timers, call shutdown().
"""

import asyncio
import logging
import uuid
from typing import Callable

from ..core.errors import NotificationPermissionDenied
from ..core.ports import OutboundMessenger

logger = logging.getLogger(__name__)

FiredCallback = Callable[[str], None]


class LocalNotificationScheduler:
    def __init__(
        self,
        messenger: OutboundMessenger,
        *,
        enabled: bool = True,
        on_fired: FiredCallback | None = None,
    ) -> None:
        self._messenger = messenger
        self._enabled = bool(enabled)
        self._granted: bool | None = None
        self._on_fired = on_fired
        self._timers: dict[str, asyncio.Task[None]] = {}

    async def request_permissions(self) -> bool:
        self._granted = self._enabled
        if not self._granted:
            logger.warning("Notification permission not granted; reminders are disabled.")
        return self._granted

    def _permitted(self) -> bool:
        # Permission is asked once at startup; an unasked scheduler follows the setting.
        return self._enabled if self._granted is None else self._granted

    async def schedule_one_shot(self, title: str, body: str, delay_seconds: float) -> str:
        if not self._permitted():
            raise NotificationPermissionDenied()

        handle = uuid.uuid4().hex
        self._timers[handle] = asyncio.create_task(
            self._fire_after(handle, f"{title}: {body}", max(0.0, float(delay_seconds))),
            name=f"reminder-{handle}",
        )
        return handle

    async def cancel(self, handle: str) -> None:
        timer = self._timers.pop(handle, None)
        if timer is None:
            # Already fired or never known.
            return
        timer.cancel()
        logger.debug("Reminder cancelled handle=%s", handle)

    def pending(self) -> list[str]:
        return list(self._timers)

    async def shutdown(self) -> None:
        timers = list(self._timers.values())
        self._timers.clear()
        for t in timers:
            t.cancel()
        if timers:
            await asyncio.gather(*timers, return_exceptions=True)
        logger.debug("LocalNotificationScheduler stopped (cancelled=%d)", len(timers))

    async def _fire_after(self, handle: str, text: str, delay: float) -> None:
        await asyncio.sleep(delay)
        self._timers.pop(handle, None)
        try:
            await self._messenger.send_text(text=text)
            logger.info("Reminder delivered handle=%s", handle)
        except Exception:
            logger.exception("Reminder delivery failed handle=%s", handle)
            return

        if self._on_fired is not None:
            try:
                self._on_fired(handle)
            except Exception:
                logger.exception("on_fired callback failed handle=%s", handle)
