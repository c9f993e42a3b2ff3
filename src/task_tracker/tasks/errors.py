# tasks/errors.py

from __future__ import annotations


class TaskStoreError(RuntimeError):
    """Storage backend failure (I/O or database). The original error is chained as __cause__."""
