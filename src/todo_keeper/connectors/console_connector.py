# src/todo_keeper/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
import sys
import threading
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _rewrite_prev_line(line: str) -> None:
    """
    Replace the last terminal line with `line`.
    Best-effort: if not a TTY, just print a new line.
    """
    try:
        if sys.stdout.isatty():
            sys.stdout.write("\033[1A\033[2K\r")
            sys.stdout.write(line + "\n")
            sys.stdout.flush()
        else:
            print(line)
    except OSError:
        print(line)


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


class ConsoleMessenger:
    """OutboundMessenger that prints fired reminders into the console."""

    async def send_text(self, *, text: str) -> None:
        _print_ts(f"[REMINDER] {text}")


def _start_stdin_reader(loop: asyncio.AbstractEventLoop, lines: asyncio.Queue[str | None]) -> None:
    """
    Feed stdin lines into `lines` from a daemon thread (None on EOF).

    A daemon thread, not the default executor: a blocked readline() must not
    keep the process alive after the event loop exits.
    """

    def _read() -> None:
        while True:
            line = sys.stdin.readline()
            try:
                loop.call_soon_threadsafe(lines.put_nowait, line or None)
            except RuntimeError:
                # Event loop already closed.
                return
            if not line:
                return

    threading.Thread(target=_read, name="console-stdin", daemon=True).start()


async def run_console_loop(state: AppState) -> None:
    """
    Interactive REPL.

    stdin is read on a background thread so reminder timers keep firing on
    the event loop while the prompt waits.
    """
    logger.info("Console connector started (user=%s).", state.current_user)
    _print_ts("[CONSOLE] Use /help for commands. Use /exit to quit.\n")

    lines: asyncio.Queue[str | None] = asyncio.Queue()
    _start_stdin_reader(asyncio.get_running_loop(), lines)

    def emit(text: str) -> None:
        _print_ts(text)

    while True:
        prompt = f"{state.current_user or 'guest'}> "
        print(prompt, end="", flush=True)
        raw = await lines.get()
        if raw is None:
            logger.info("Console EOF received, exiting.")
            print()
            break
        user_input = raw.strip()

        if not user_input:
            continue

        _rewrite_prev_line(f"[{_ts_local()}] {prompt}{user_input}")

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            response = await command_registry.handle(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response is None:
            response = "Commands start with '/'. Use /help to list available commands."
        _print_ts(response)

    logger.info("Console connector finished.")
