# src/todo_keeper/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "todo_keeper.log"

_FILE_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Console gets todo_keeper records at the handler level; everything else
    (third-party libraries, captured 'py.warnings') only at ERROR+.
    Missing reminders already reach the user as a [REMINDER] line.
    """

    app_prefix = "todo_keeper."

    def filter(self, record: logging.LogRecord) -> bool:
        return record.name.startswith(self.app_prefix) or record.levelno >= logging.ERROR


def _attach(root: logging.Logger, handler: logging.Handler, level: int, fmt: str) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)


def setup_logging(
    *,
    log_dir: str | Path = ".local/todo_keeper",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Replace root handlers with a filtered stderr console and a full log file
    under log_dir. Returns the log file path.

    Call once at startup.
    """
    log_file = Path(log_dir) / LOG_FILE_NAME
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    console = logging.StreamHandler(sys.stderr)
    console.addFilter(_ConsoleNoiseFilter())
    _attach(root, console, console_level, _CONSOLE_FORMAT)
    _attach(root, logging.FileHandler(str(log_file), encoding="utf-8"), file_level, _FILE_FORMAT)

    # NotificationSchedulingFailed and other warnings.warn(...) land in the file as 'py.warnings'.
    logging.captureWarnings(True)

    # passlib logs backend detection at DEBUG.
    logging.getLogger("passlib").setLevel(logging.INFO)
    return log_file
