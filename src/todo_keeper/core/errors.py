# src/todo_keeper/core/errors.py

"""
Error taxonomy for the core.

Every failure a caller can act on is a TodoError subclass whose str() is a
user-presentable message. NotificationSchedulingFailed is a warning: the
owning task is still saved, only without a reminder.
"""

from __future__ import annotations


class TodoError(Exception):
    """Base class for all core errors."""

    default_message = "Operation failed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class ValidationError(TodoError):
    """Caller-correctable error. Never retried by the core."""


class DuplicateUsername(ValidationError):
    def __init__(self, username: str) -> None:
        super().__init__(f"Username {username!r} is already taken.")
        self.username = username


class InvalidCredentials(ValidationError):
    # One message for unknown user and wrong password alike.
    default_message = "Invalid username or password."

    def __init__(self) -> None:
        super().__init__()


class InvalidUsername(ValidationError):
    default_message = "Username must not be empty."


class PasswordTooShort(ValidationError):
    def __init__(self, min_length: int) -> None:
        super().__init__(f"Password must be at least {min_length} characters long.")
        self.min_length = min_length


class PasswordMismatch(ValidationError):
    default_message = "Passwords do not match."


class NotFound(ValidationError):
    def __init__(self, what: str, key: str) -> None:
        super().__init__(f"{what} {key!r} not found.")
        self.what = what
        self.key = key


class EmptyText(ValidationError):
    default_message = "Task text must not be empty."


class DeadlineNotFuture(ValidationError):
    default_message = "Deadline must be in the future."


class NoActiveSession(ValidationError):
    default_message = "Not logged in."


class StorageUnavailable(TodoError):
    """The key-value store failed or returned data we cannot decode."""

    default_message = "Local storage is unavailable."


class NotificationPermissionDenied(TodoError):
    default_message = "Notification permission was not granted."


class NotificationSchedulingFailed(UserWarning):
    """Reminder could not be scheduled; the task was saved without one."""
