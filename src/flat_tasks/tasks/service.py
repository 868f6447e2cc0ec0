"""Task operations over the flat-file store.

Every operation is a full load, an in-memory mutation and a full save.
Without ``serialize_writes`` two concurrent writers can lose an update
(last save wins). With it, threads of one process are serialised;
separate processes can still race.
"""

from __future__ import annotations

import html
import secrets
import threading
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager, nullcontext
from datetime import datetime

from flat_tasks.logging import Loggers
from flat_tasks.tasks.store import CREATED_AT_FORMAT, Task, TaskStore

logger = Loggers.service()


def generate_task_id() -> str:
    """Return a 21 character hex id built from the current time.

    Seconds fill the first 8 digits and microseconds the next 5; 8 random
    digits follow so ids minted within the same microsecond still differ.
    """
    now = time.time()
    seconds = int(now)
    micros = int((now - seconds) * 1_000_000)
    return f"{seconds:08x}{micros:05x}{secrets.token_hex(4)}"


def sanitize_title(title: str) -> str:
    """Escape markup-significant characters for direct embedding in HTML."""
    return html.escape(title, quote=True)


class TaskService:
    """Add, toggle, delete and list tasks.

    Example:
        >>> service = TaskService(TaskStore(path))
        >>> task = service.add("Buy milk")
        >>> service.toggle(task.id)
        True
    """

    def __init__(
        self,
        store: TaskStore,
        *,
        serialize_writes: bool = True,
        id_factory: Callable[[], str] = generate_task_id,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = store
        self._lock = threading.Lock() if serialize_writes else None
        self._id_factory = id_factory
        self._clock = clock

    @property
    def store(self) -> TaskStore:
        return self._store

    def _locked(self):
        return self._lock if self._lock is not None else nullcontext()

    @contextmanager
    def _write_cycle(self) -> Iterator[list[Task]]:
        with self._locked():
            tasks = self._store.load()
            yield tasks
            self._store.save(tasks)

    def add(self, raw_title: str) -> Task | None:
        """Append a new task.

        Args:
            raw_title: Title as submitted; surrounding whitespace is trimmed.

        Returns:
            The created Task, or None if the trimmed title is empty.
        """
        title = raw_title.strip()
        if not title:
            logger.debug("task_add_skipped", reason="empty_title")
            return None

        task = Task(
            id=self._id_factory(),
            title=sanitize_title(title),
            completed=False,
            created_at=self._clock().strftime(CREATED_AT_FORMAT),
        )
        with self._write_cycle() as tasks:
            tasks.append(task)
        logger.info("task_added", task_id=task.id)
        return task

    def toggle(self, task_id: str) -> bool:
        """Flip ``completed`` on the first task with ``task_id``.

        The collection is saved even when nothing matched.

        Returns:
            True if a task was found.
        """
        found = False
        with self._write_cycle() as tasks:
            for task in tasks:
                if task.id == task_id:
                    task.completed = not task.completed
                    found = True
                    break
        if found:
            logger.info("task_toggled", task_id=task_id)
        else:
            logger.debug("task_toggle_missed", task_id=task_id)
        return found

    def delete(self, task_id: str) -> bool:
        """Remove every task with ``task_id``.

        Returns:
            True if anything was removed.
        """
        with self._write_cycle() as tasks:
            before = len(tasks)
            tasks[:] = [task for task in tasks if task.id != task_id]
            removed = len(tasks) < before
        if removed:
            logger.info("task_deleted", task_id=task_id)
        else:
            logger.debug("task_delete_missed", task_id=task_id)
        return removed

    def list(self) -> list[Task]:
        """Return the current collection in insertion order.

        Loading may create the file, so it shares the write lock.
        """
        with self._locked():
            return self._store.load()
