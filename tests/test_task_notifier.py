# tests/test_task_notifier.py

from __future__ import annotations

import pytest

from todo_keeper.core.errors import NotificationSchedulingFailed
from todo_keeper.tasks.task_notifier import TaskNotifier


@pytest.mark.asyncio
async def test_past_due_is_skipped_without_calling_scheduler(notifier, scheduler, clock) -> None:
    assert await notifier.schedule("late", clock.now) is None
    assert await notifier.schedule("later", clock.now - 5) is None
    assert scheduler.scheduled == []


@pytest.mark.asyncio
async def test_future_deadline_returns_handle(notifier, scheduler, clock) -> None:
    handle = await notifier.schedule("ping", clock.now + 90)

    assert handle == "n1"
    call = scheduler.scheduled[0]
    assert (call.title, call.body) == ("Reminder", "ping")
    assert call.delay_seconds == pytest.approx(90)


@pytest.mark.asyncio
async def test_min_lead_seconds(scheduler, clock) -> None:
    notifier = TaskNotifier(scheduler, clock=clock, min_lead_seconds=5)

    assert await notifier.schedule("too soon", clock.now + 5) is None
    assert await notifier.schedule("fine", clock.now + 6) is not None


@pytest.mark.asyncio
async def test_scheduler_failure_warns_and_returns_none(notifier, scheduler, clock) -> None:
    scheduler.fail = True

    with pytest.warns(NotificationSchedulingFailed, match="platform denied"):
        assert await notifier.schedule("ping", clock.now + 90) is None


@pytest.mark.asyncio
async def test_cancel_is_best_effort(notifier, scheduler) -> None:
    await notifier.cancel(None)
    assert scheduler.cancelled == []

    await notifier.cancel("n1")
    assert scheduler.cancelled == ["n1"]

    scheduler.fail_cancel = True
    await notifier.cancel("n2")
