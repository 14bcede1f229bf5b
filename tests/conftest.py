# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_keeper.accounts.credentials import build_password_context
from todo_keeper.accounts.directory import AccountDirectory
from todo_keeper.cli.bootstrap import create_initial_state
from todo_keeper.core.session import SessionState
from todo_keeper.core.state import AppState
from todo_keeper.tasks.task_notifier import TaskNotifier
from todo_keeper.tasks.task_store import TaskStore

from .fakes import FakeClock, FakeNotificationScheduler, InMemoryKeyValueStore

# Low PBKDF2 cost keeps the suite fast; the algorithm is unchanged.
FAST_ROUNDS = 1000


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def kv() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture()
def scheduler() -> FakeNotificationScheduler:
    return FakeNotificationScheduler()


@pytest.fixture()
def notifier(scheduler: FakeNotificationScheduler, clock: FakeClock) -> TaskNotifier:
    return TaskNotifier(scheduler, clock=clock, title="Reminder")


@pytest.fixture()
def task_store(kv: InMemoryKeyValueStore, notifier: TaskNotifier, clock: FakeClock) -> TaskStore:
    return TaskStore(kv, notifier, clock=clock)


@pytest.fixture()
def accounts(kv: InMemoryKeyValueStore, task_store: TaskStore, clock: FakeClock) -> AccountDirectory:
    return AccountDirectory(
        kv,
        task_store,
        clock=clock,
        password_context=build_password_context(FAST_ROUNDS),
    )


@pytest.fixture()
def session(kv: InMemoryKeyValueStore) -> SessionState:
    return SessionState(kv)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="todo-test",
        data_dir=tmp_path,
        store_db_path=tmp_path / "store.sqlite3",
        notifications_enabled=True,
        notification_title="Reminder",
        notify_min_lead_seconds=0.0,
        password_hash_rounds=FAST_ROUNDS,
        console_enabled=False,
    )


@pytest.fixture()
def state(
    settings: SimpleNamespace,
    kv: InMemoryKeyValueStore,
    scheduler: FakeNotificationScheduler,
) -> AppState:
    """AppState wired with in-memory fakes (real clock)."""
    return create_initial_state(settings=settings, kv=kv, scheduler=scheduler)
