# tests/test_commands.py

from __future__ import annotations

import pytest

from todo_keeper.cli.bootstrap import restore_session
from todo_keeper.cli.commands import CommandRegistry, registry
from todo_keeper.core.errors import NotificationSchedulingFailed


@pytest.mark.asyncio
async def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}
    notes: list[str] = []

    async def h2(state, args):
        called["h2"] += 1
        return "h2"

    async def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b", aliases=["bee"])

    assert await reg.handle(state, "/a x") == "h2"
    assert await reg.handle(state, "/BEE y", emit=notes.append) == "h3"
    assert called == {"h2": 1, "h3": 1}
    assert notes == ["note"]


@pytest.mark.asyncio
async def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert await reg.handle(state, "hello") is None
    assert "Unknown command" in (await reg.handle(state, "/nope") or "")
    assert "Empty command" in (await reg.handle(state, "/") or "")


@pytest.mark.asyncio
async def test_register_login_add_done_rm(state, scheduler) -> None:
    assert "Passwords do not match" in await registry.handle(state, "/register alice secret1 secret2")
    assert "at least 6" in await registry.handle(state, "/register alice short short")
    assert "created" in await registry.handle(state, "/register alice secret1 secret1")

    assert await registry.handle(state, "/list") == "Not logged in."
    assert "Invalid username or password" in await registry.handle(state, "/login alice nope!!")

    reply = await registry.handle(state, "/login alice secret1")
    assert reply.startswith("Logged in as alice")
    assert state.current_user == "alice"
    assert await state.session.get_current() == "alice"

    reply = await registry.handle(state, "/add +1h Buy milk")
    assert reply.startswith("Added:") and "Buy milk" in reply
    [task] = await state.tasks.list("alice")
    assert task.notification_id is not None

    assert (await registry.handle(state, f"/done {task.id}")).startswith("Completed")
    assert "No pending tasks." == await registry.handle(state, "/list pending")
    assert "[x]" in await registry.handle(state, "/list completed")

    assert await registry.handle(state, f"/rm {task.id}") == f"Deleted task {task.id}."
    assert await registry.handle(state, "/list") == "No tasks."
    assert scheduler.live() == set()


@pytest.mark.asyncio
async def test_add_rejects_past_and_reports_missing_reminder(state, scheduler) -> None:
    await registry.handle(state, "/register bob secret1 secret1")
    await registry.handle(state, "/login bob secret1")

    assert await registry.handle(state, "/add 2000-01-01 Old task") == "Deadline must be in the future."
    assert (await registry.handle(state, "/add tomorrow-ish x")).startswith("Usage: /add")

    scheduler.fail = True
    notes: list[str] = []
    with pytest.warns(NotificationSchedulingFailed):
        reply = await registry.handle(state, "/add +2h Call mom", emit=notes.append)

    assert "Reminder not scheduled." in reply
    assert "(no reminder)" in reply
    assert notes and notes[0].startswith("[REMINDER]")
    assert len(await state.tasks.list("bob")) == 1


@pytest.mark.asyncio
async def test_edit_and_delete_account(state) -> None:
    await registry.handle(state, "/register carol secret1 secret1")
    await registry.handle(state, "/login carol secret1")
    await registry.handle(state, "/add +1h draft")
    [task] = await state.tasks.list("carol")

    reply = await registry.handle(state, f"/edit {task.id} +3h final text")
    assert reply.startswith("Updated:") and "final text" in reply
    assert "not found" in await registry.handle(state, "/edit 123 +3h nothing")

    assert "Invalid username or password" in await registry.handle(state, "/delete-account wrong1")
    reply = await registry.handle(state, "/delete-account secret1")
    assert "deleted" in reply

    assert state.current_user is None
    assert await state.session.get_current() is None
    assert not await state.accounts.exists("carol")
    assert await state.tasks.list("carol") == []


@pytest.mark.asyncio
async def test_logout_and_restore_session(state, scheduler) -> None:
    await registry.handle(state, "/register dave secret1 secret1")
    await registry.handle(state, "/login dave secret1")
    await registry.handle(state, "/add +1h something")
    [before] = await state.tasks.list("dave")

    # Simulate a restart: a new process only has the persisted marker.
    state.current_user = None
    assert await restore_session(state) == "dave"
    assert state.current_user == "dave"
    [after] = await state.tasks.list("dave")
    assert after.notification_id != before.notification_id
    assert scheduler.live() == {after.notification_id}

    assert await registry.handle(state, "/logout") == "Logged out dave."
    assert await registry.handle(state, "/whoami") == "Not logged in."
    assert await restore_session(state) is None


@pytest.mark.asyncio
async def test_restore_session_for_deleted_account_clears_marker(state) -> None:
    await state.session.set_current("ghost")

    assert await restore_session(state) is None
    assert await state.session.get_current() is None


@pytest.mark.asyncio
async def test_broken_emitter_does_not_lose_the_reply(state, scheduler, caplog) -> None:
    await registry.handle(state, "/register erin secret1 secret1")
    await registry.handle(state, "/login erin secret1")
    scheduler.fail = True

    def broken(note: str) -> None:
        raise RuntimeError("console closed")

    with pytest.warns(NotificationSchedulingFailed):
        reply = await registry.handle(state, "/add +2h Call mom", emit=broken)

    assert reply.startswith("Added:") and "Reminder not scheduled." in reply
    assert "Command emitter failed." in caplog.text
    assert len(await state.tasks.list("erin")) == 1


@pytest.mark.asyncio
async def test_list_unknown_filter_shows_usage(state) -> None:
    await registry.handle(state, "/register frank secret1 secret1")
    await registry.handle(state, "/login frank secret1")
    await registry.handle(state, "/add +1h x")

    assert await registry.handle(state, "/list pendng") == "Usage: /list [all|pending|completed]"
    assert (await registry.handle(state, "/ls PENDING")).startswith("Tasks of frank (pending):")
