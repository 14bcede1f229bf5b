# tests/test_scenarios.py

from __future__ import annotations

import pytest

from todo_keeper.core.errors import DeadlineNotFuture, DuplicateUsername, InvalidCredentials


@pytest.mark.asyncio
async def test_alice_full_lifecycle(accounts, task_store, scheduler, clock) -> None:
    await accounts.register("alice", "secret1")
    account = await accounts.authenticate("alice", "secret1")
    assert account.username == "alice"

    task = await task_store.create("alice", "Buy milk", clock.now + 3600)
    assert task.completed is False
    assert task.notification_id is not None

    done = await task_store.toggle_completed("alice", task.id)
    assert done.completed is True

    await task_store.delete("alice", task.id)
    assert await task_store.list("alice") == []
    assert scheduler.live() == set()


@pytest.mark.asyncio
async def test_past_deadline_leaves_list_empty(accounts, task_store, clock) -> None:
    await accounts.register("alice", "secret1")

    with pytest.raises(DeadlineNotFuture):
        await task_store.create("alice", "Old task", clock.now - 10)

    assert await task_store.list("alice") == []


@pytest.mark.asyncio
async def test_deleting_alice_leaves_bob_untouched(accounts, task_store, clock) -> None:
    await accounts.register("alice", "secret1")
    await accounts.register("bob", "secret2")
    await task_store.create("alice", "Water plants", clock.now + 60)
    bob_task = await task_store.create("bob", "Water plants", clock.now + 60)

    await accounts.delete_account("alice")

    assert await task_store.list("bob") == [bob_task]
    with pytest.raises(InvalidCredentials):
        await accounts.authenticate("alice", "secret1")


@pytest.mark.asyncio
@pytest.mark.parametrize("second_password", ["secret1", "different-pass"])
async def test_second_registration_always_fails(accounts, second_password) -> None:
    await accounts.register("erin", "secret1")

    with pytest.raises(DuplicateUsername):
        await accounts.register("erin", second_password)
