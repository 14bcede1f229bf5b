# src/todo_keeper/cli/timefmt.py

"""
Deadline parsing/formatting for the console.

The core stores deadlines as epoch seconds; local-time strings only exist here.

Accepted input:
- "+30m", "+2h", "+1d"     relative to now
- "2026-10-20 18:30"       local date and time
- "2026-10-20"             local date, end of day (23:59)
"""

from __future__ import annotations

import re
import time
from datetime import datetime

_RELATIVE_RE = re.compile(r"^\+(\d+)([smhd])$", re.IGNORECASE)
_UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}

DISPLAY_FORMAT = "%Y-%m-%d %H:%M"


def parse_deadline(raw: str, *, now: float | None = None) -> float | None:
    """Return epoch seconds, or None if `raw` is not a deadline."""
    s = (raw or "").strip()
    if not s:
        return None

    m = _RELATIVE_RE.match(s)
    if m:
        base = time.time() if now is None else now
        return base + int(m.group(1)) * _UNIT_SECONDS[m.group(2).lower()]

    try:
        return datetime.strptime(s, "%Y-%m-%d %H:%M").timestamp()
    except ValueError:
        pass

    try:
        day = datetime.strptime(s, "%Y-%m-%d")
    except ValueError:
        return None
    return day.replace(hour=23, minute=59).timestamp()


def split_deadline(args: list[str], *, now: float | None = None) -> tuple[float | None, list[str]]:
    """
    Consume a deadline from the front of `args`.

    "YYYY-MM-DD HH:MM" spans two tokens, so that form is tried first.
    Returns (deadline, remaining_args); deadline is None if nothing matched.
    """
    if len(args) >= 2:
        ts = parse_deadline(f"{args[0]} {args[1]}", now=now)
        if ts is not None:
            return ts, args[2:]
    if args:
        ts = parse_deadline(args[0], now=now)
        if ts is not None:
            return ts, args[1:]
    return None, list(args)


def format_deadline(ts: float) -> str:
    return datetime.fromtimestamp(ts).strftime(DISPLAY_FORMAT)
