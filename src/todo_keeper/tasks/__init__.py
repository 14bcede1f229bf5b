"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskFilter)
- task_store.py: per-user task collections persisted as one key-value blob
- task_notifier.py: binds task deadlines to the notification scheduler
"""
