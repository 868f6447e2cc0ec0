"""Flat-file task store.

The whole task collection lives in a single JSON array and is always
read and written as one unit: no indexing, no partial updates. Writes
go through a temp file and an atomic rename.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from flat_tasks.errors import StoreError
from flat_tasks.logging import Loggers
from flat_tasks.persistence._utils import atomic_write_json

logger = Loggers.store()

CREATED_AT_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class Task:
    """A single to-do entry.

    ``title`` is stored already HTML-escaped; ``created_at`` uses
    CREATED_AT_FORMAT and is informational only.
    """

    id: str
    title: str
    completed: bool = False
    created_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "completed": self.completed,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        return cls(
            id=str(data["id"]),
            title=str(data["title"]),
            completed=bool(data.get("completed", False)),
            created_at=str(data.get("createdAt", "")),
        )


class TaskStore:
    """Durable load/save of the entire task collection.

    The storage location is passed in explicitly so tests can point
    the store at a temporary file.

    Example:
        >>> store = TaskStore(settings.tasks_path)
        >>> tasks = store.load()
        >>> tasks.append(Task(id="abc", title="Buy milk"))
        >>> store.save(tasks)
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Task]:
        """Read the persisted collection in insertion order.

        A missing file is initialised with an empty collection. A file
        that cannot be read or parsed loads as an empty collection.
        """
        if not self._path.exists():
            logger.info("tasks_file_initialised", path=str(self._path))
            self.save([])
            return []

        try:
            raw = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("tasks_file_unreadable", path=str(self._path), error=str(e))
            return []

        if not raw.strip():
            return []

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise TypeError(f"expected a JSON array, got {type(data).__name__}")
            return [Task.from_dict(item) for item in data]
        except (json.JSONDecodeError, KeyError, TypeError, AttributeError) as e:
            logger.warning("tasks_file_unparseable", path=str(self._path), error=str(e))
            return []

    def save(self, tasks: list[Task]) -> None:
        """Overwrite the persisted collection with ``tasks``.

        Raises:
            StoreError: If the file cannot be written.
        """
        try:
            atomic_write_json(self._path, [task.to_dict() for task in tasks])
        except OSError as e:
            raise StoreError(self._path, f"could not write tasks: {e}") from e
