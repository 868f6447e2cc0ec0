"""Task list persistence and operations.

Example:
    >>> service = TaskService(TaskStore(settings.tasks_path))
    >>> task = service.add("Buy milk")
    >>> service.toggle(task.id)
    >>> service.list()
"""

from flat_tasks.tasks.service import TaskService, generate_task_id, sanitize_title
from flat_tasks.tasks.store import Task, TaskStore

__all__ = ["Task", "TaskStore", "TaskService", "generate_task_id", "sanitize_title"]
