# src/todo_keeper/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (store/scheduler/accounts/tasks),
- restores the persisted session.
"""

from __future__ import annotations

import logging

from ..accounts.credentials import build_password_context
from ..accounts.directory import AccountDirectory
from ..config import get_settings
from ..core.ports import KeyValueStore, NotificationScheduler, OutboundMessenger
from ..core.session import SessionState
from ..core.state import AppState
from ..notifications.local_scheduler import LocalNotificationScheduler
from ..storage.kv_store import SqliteKeyValueStore
from ..tasks.task_notifier import TaskNotifier
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.store_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(
    *,
    settings=None,
    messenger: OutboundMessenger | None = None,
    kv: KeyValueStore | None = None,
    scheduler: NotificationScheduler | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Collaborators are injectable for tests; by default a SQLite store and the
    in-process scheduler are used. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if kv is None:
        _ensure_local_dirs(settings)
        kv = SqliteKeyValueStore(settings.store_db_path)

    if scheduler is None:
        if messenger is None:
            raise ValueError("messenger is required when no scheduler is given")
        scheduler = LocalNotificationScheduler(messenger, enabled=settings.notifications_enabled)

    notifier = TaskNotifier(
        scheduler,
        title=settings.notification_title,
        min_lead_seconds=settings.notify_min_lead_seconds,
    )
    tasks = TaskStore(kv, notifier)
    accounts = AccountDirectory(
        kv,
        tasks,
        password_context=build_password_context(settings.password_hash_rounds or None),
    )

    return AppState(
        settings=settings,
        accounts=accounts,
        tasks=tasks,
        session=SessionState(kv),
        scheduler=scheduler,
    )


async def restore_session(state: AppState) -> str | None:
    """
    Read the persisted session marker and re-arm the user's reminders.

    A marker pointing at an account that no longer exists is cleared.
    """
    username = await state.session.get_current()
    if not username:
        return None

    if not await state.accounts.exists(username):
        logger.warning("Persisted session refers to a missing account; clearing it.")
        await state.session.set_current(None)
        return None

    state.current_user = username
    live = await state.tasks.resync_notifications(username)
    logger.info("Session restored user=%s reminders=%d", username, live)
    return username
