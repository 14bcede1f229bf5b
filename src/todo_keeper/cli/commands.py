# src/todo_keeper/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import cast

from ..accounts.credentials import check_password_confirmation
from ..core.errors import NoActiveSession, TodoError
from ..core.state import AppState
from ..tasks.task_models import Task, TaskFilter
from .timefmt import format_deadline, split_deadline

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], Awaitable[str]]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], Awaitable[str]]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        Core errors are rendered as their user-facing message.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return await h3(state, args, emit)
            h2 = cast(CommandHandler2, handler)
            return await h2(state, args)
        except TodoError as e:
            logger.debug("/%s rejected: %s", name, e)
            return str(e)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _require_login(state: AppState) -> str:
    if not state.current_user:
        raise NoActiveSession()
    return state.current_user


def _format_task(task: Task) -> str:
    mark = "x" if task.completed else " "
    bell = "" if task.notification_id else " (no reminder)"
    return f"[{mark}] {task.id}  {task.text} - {format_deadline(task.deadline)}{bell}"


def _reminder_note(task: Task, emit: CommandEmitter | None) -> str:
    # No handle: scheduling failed (logged as NotificationSchedulingFailed) or the
    # deadline falls inside the configured minimum lead time.
    if task.notification_id:
        return ""
    if emit:
        try:
            emit("[REMINDER] No reminder was scheduled for this task.")
        except Exception:
            logger.exception("Command emitter failed.")
    return " Reminder not scheduled."


async def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


async def cmd_register(state: AppState, args: list[str]) -> str:
    """/register <username> <password> <password again>"""
    if len(args) != 3:
        return "Usage: /register <username> <password> <password again>"
    username, password, confirmation = args
    check_password_confirmation(password, confirmation)
    await state.accounts.register(username, password)
    return f"Account {username!r} created. Use /login {username} <password>."


async def cmd_login(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/login <username> <password>"""
    if len(args) != 2:
        return "Usage: /login <username> <password>"
    username, password = args
    account = await state.accounts.authenticate(username, password)

    await state.session.set_current(account.username)
    state.current_user = account.username

    live = await state.tasks.resync_notifications(account.username)
    return f"Logged in as {account.username}. Active reminders: {live}."


async def cmd_logout(state: AppState, args: list[str]) -> str:
    if not state.current_user:
        return "Not logged in."
    username = state.current_user
    await state.session.set_current(None)
    state.current_user = None
    return f"Logged out {username}."


async def cmd_whoami(state: AppState, args: list[str]) -> str:
    return f"Logged in as {state.current_user}." if state.current_user else "Not logged in."


async def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/add <deadline> <text...>"""
    username = _require_login(state)
    deadline, rest = split_deadline(args)
    if deadline is None:
        return "Usage: /add <YYYY-MM-DD [HH:MM] | +30m | +2h | +1d> <text>"

    task = await state.tasks.create(username, " ".join(rest), deadline)

    return f"Added: {_format_task(task)}.{_reminder_note(task, emit)}"


async def cmd_edit(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/edit <id> <deadline> <text...>"""
    username = _require_login(state)
    if not args:
        return "Usage: /edit <id> <deadline> <text>"
    task_id = args[0]
    deadline, rest = split_deadline(args[1:])
    if deadline is None:
        return "Usage: /edit <id> <YYYY-MM-DD [HH:MM] | +30m | +2h | +1d> <text>"

    task = await state.tasks.update(username, task_id, " ".join(rest), deadline)

    return f"Updated: {_format_task(task)}.{_reminder_note(task, emit)}"


async def cmd_done(state: AppState, args: list[str]) -> str:
    """/done <id> toggles completion."""
    username = _require_login(state)
    if len(args) != 1:
        return "Usage: /done <id>"
    task = await state.tasks.toggle_completed(username, args[0])
    return f"{'Completed' if task.completed else 'Reopened'}: {_format_task(task)}"


async def cmd_rm(state: AppState, args: list[str]) -> str:
    username = _require_login(state)
    if len(args) != 1:
        return "Usage: /rm <id>"
    await state.tasks.delete(username, args[0])
    return f"Deleted task {args[0]}."


async def cmd_list(state: AppState, args: list[str]) -> str:
    """
    /list            -> all tasks
    /list pending    -> not completed
    /list completed  -> completed only
    """
    username = _require_login(state)
    try:
        which = TaskFilter.parse(args[0] if args else None)
    except ValueError:
        return "Usage: /list [all|pending|completed]"
    tasks = await state.tasks.filter(username, which)
    if not tasks:
        return "No tasks." if which is TaskFilter.ALL else f"No {which.value} tasks."
    lines = [f"Tasks of {username} ({which.value}):"]
    lines.extend(_format_task(t) for t in tasks)
    return "\n".join(lines)


async def cmd_delete_account(state: AppState, args: list[str]) -> str:
    """/delete-account <password> removes the logged-in account and all its tasks."""
    username = _require_login(state)
    if len(args) != 1:
        return "Usage: /delete-account <password>"
    await state.accounts.authenticate(username, args[0])
    await state.accounts.delete_account(username)

    await state.session.set_current(None)
    state.current_user = None
    return f"Account {username!r} and all its tasks were deleted."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("register", cmd_register, help_text="Create an account: /register <user> <pass> <pass>.")
registry.register("login", cmd_login, help_text="Log in: /login <user> <pass>.")
registry.register("logout", cmd_logout, help_text="Log out.")
registry.register("whoami", cmd_whoami, help_text="Show the logged-in user.")
registry.register("add", cmd_add, help_text="Add a task: /add <deadline> <text>.", aliases=["new"])
registry.register("edit", cmd_edit, help_text="Change a task: /edit <id> <deadline> <text>.")
registry.register("done", cmd_done, help_text="Toggle completion: /done <id>.")
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <id>.", aliases=["del"])
registry.register("list", cmd_list, help_text="List tasks: /list [all|pending|completed].", aliases=["ls"])
registry.register(
    "delete-account",
    cmd_delete_account,
    help_text="Delete your account and all tasks: /delete-account <password>.",
)
