# src/todo_keeper/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, asks for notification permission once,
restores the persisted session, then runs the console REPL on the event loop.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state, restore_session
from ..config import get_settings
from ..connectors.console_connector import ConsoleMessenger, run_console_loop
from ..core.errors import TodoError
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _shutdown(state) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    # SqliteKeyValueStore uses short-lived connections per call; no explicit close required.
    try:
        stop = getattr(state.scheduler, "shutdown", None)
        if stop is not None:
            await stop()
    except Exception:
        logger.debug("Scheduler shutdown failed.", exc_info=True)


async def run_app() -> None:
    settings = get_settings()

    state = create_initial_state(settings=settings, messenger=ConsoleMessenger())

    granted = await state.scheduler.request_permissions()
    if not granted:
        print("Notification permission not granted: tasks will be saved without reminders.")

    try:
        user = await restore_session(state)
    except TodoError as e:
        logger.error("Session restore failed: %s", e)
        user = None
    if user:
        print(f"Welcome back, {user}.")

    try:
        if settings.console_enabled:
            await run_console_loop(state)
        else:
            logger.info("Console disabled; nothing to run.")
    finally:
        await _shutdown(state)
        logger.info("Bye.")


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)

    log_file = setup_logging(log_dir=settings.data_dir, console_level=console_level)
    logger.info("Starting %s, log file %s", settings.app_name, log_file)

    try:
        asyncio.run(run_app())
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down.")


if __name__ == "__main__":
    main()
