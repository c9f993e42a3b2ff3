"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, DeleteOutcome)
- errors.py: TaskStoreError raised by both backends
- json_store.py: JSON-document storage (whole collection rewritten on each mutation)
- task_store.py: SQLite-backed storage
"""
