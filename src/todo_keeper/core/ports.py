# src/todo_keeper/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage/notification backends swappable and makes testing easier.
"""

from typing import Awaitable, Callable, Protocol

Clock = Callable[[], float]
# Returns "now" as epoch seconds (time.time-compatible).


class KeyValueStore(Protocol):
    """
    Durable, process-wide string store.

    Values are opaque strings; the core serializes its records as JSON blobs.
    Implementations raise on failure; the core maps that to StorageUnavailable.
    """

    def get_string(self, key: str) -> Awaitable[str | None]: ...
    def set_string(self, key: str, value: str) -> Awaitable[None]: ...


class NotificationScheduler(Protocol):
    """
    One-shot local notifications.

    - request_permissions() is invoked once at startup by the front-end
    - schedule_one_shot() may raise (e.g. permission denied)
    - cancel() is best-effort: already-fired or unknown handles are ignored
    """

    def request_permissions(self) -> Awaitable[bool]: ...
    def schedule_one_shot(self, title: str, body: str, delay_seconds: float) -> Awaitable[str]: ...
    def cancel(self, handle: str) -> Awaitable[None]: ...


class OutboundMessenger(Protocol):
    """Connector-side port: where fired reminders are delivered."""

    def send_text(self, *, text: str) -> Awaitable[None]: ...
