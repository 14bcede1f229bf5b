# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name (default: todo-keeper).",
    "TODO_LOG_LEVEL": "Console logging level (default: WARNING; the file log is always DEBUG).",
    # Connectors
    "TODO_CONSOLE_ENABLED": "Enable console connector (true/false).",
    # Notifications
    "TODO_NOTIFICATIONS_ENABLED": "Grant reminder notifications at startup (default: true).",
    "TODO_NOTIFICATION_TITLE": "Title prefix of delivered reminders (default: Task reminder).",
    "TODO_NOTIFY_MIN_LEAD_SECONDS": (
        "Skip reminders due within this many seconds (default: 0 = only past-due are skipped)."
    ),
    # Accounts
    "TODO_PASSWORD_HASH_ROUNDS": "PBKDF2 rounds for new password digests (default: passlib's).",
    # Paths (gitignored)
    "TODO_DATA_DIR": "Local data directory (default: .local/todo_keeper).",
    "TODO_STORE_DB_PATH": "Key-value SQLite path (default: <data_dir>/store.sqlite3).",
}
