"""Flat Tasks - a minimal web task list backed by a single JSON file.

Components, leaf first:

- TaskStore: load/save of the whole task collection
- TaskService: add, toggle, delete and list operations
- RequestHandler: maps form submissions onto one service call
- create_app: Flask application serving the list and its forms
"""

from flat_tasks.config import (
    Settings,
    SettingsContext,
    SettingsValidationError,
    get_settings,
    reload_settings,
    set_settings,
    validate_settings,
)
from flat_tasks.errors import FlatTasksError, StoreError
from flat_tasks.tasks import Task, TaskService, TaskStore
from flat_tasks.web import RequestHandler, create_app

__all__ = [
    # Settings
    "Settings",
    "SettingsContext",
    "SettingsValidationError",
    "get_settings",
    "set_settings",
    "validate_settings",
    "reload_settings",
    # Errors
    "FlatTasksError",
    "StoreError",
    # Tasks
    "Task",
    "TaskStore",
    "TaskService",
    # Web
    "RequestHandler",
    "create_app",
]

__version__ = "0.1.0"
