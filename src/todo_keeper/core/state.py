# src/todo_keeper/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..accounts.directory import AccountDirectory
from ..tasks.task_store import TaskStore
from .ports import NotificationScheduler
from .session import SessionState


@dataclass
class AppState:
    """
    Everything the front-end needs, wired once by cli.bootstrap.

    current_user mirrors the persisted session marker for the running process;
    the core never reads it, commands pass it explicitly.
    """

    settings: Any

    accounts: AccountDirectory
    tasks: TaskStore
    session: SessionState
    scheduler: NotificationScheduler

    current_user: str | None = None
