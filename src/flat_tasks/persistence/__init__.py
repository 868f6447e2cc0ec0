"""Persistence helpers shared by the task store."""

from flat_tasks.persistence._utils import atomic_write_json

__all__ = ["atomic_write_json"]
