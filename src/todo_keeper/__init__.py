"""Local to-do list: accounts, per-user tasks with deadlines, reminder notifications."""

__version__ = "0.1.0"
