"""In-memory task store with an explicit readiness signal.

Beginner terms:
- Snapshot: a new list holding the current records; callers can read it
  while other threads keep appending to the store.
- Readiness: the startup loader flips the store to "loaded" once every
  persisted file has been processed. Until then queries see a partial list.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable

from .models import Task


class TaskStore:
    """Thread-safe ordered collection of Task records."""

    def __init__(self, tasks: Iterable[Task] | None = None, *, loaded: bool = False) -> None:
        # Lock serializes writers and snapshot copies.
        self._lock = threading.Lock()
        self._tasks: list[Task] = list(tasks or [])
        self._loaded = threading.Event()
        if loaded:
            self._loaded.set()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def snapshot(self) -> list[Task]:
        """Return a copy of the current records in store order."""
        with self._lock:
            return list(self._tasks)

    def add(self, task: Task) -> None:
        """Add a submitted task: pinned tasks go to the front, others to the back."""
        with self._lock:
            if task.pinned:
                self._tasks.insert(0, task)
            else:
                self._tasks.append(task)

    def extend(self, tasks: Iterable[Task]) -> None:
        """Append loaded tasks in the order given."""
        batch = list(tasks)
        with self._lock:
            self._tasks.extend(batch)

    @property
    def is_loaded(self) -> bool:
        return self._loaded.is_set()

    def mark_loaded(self) -> None:
        self._loaded.set()

    def wait_until_loaded(self, timeout: float | None = None) -> bool:
        """Block until loaded; return False if `timeout` elapsed first."""
        return self._loaded.wait(timeout)
