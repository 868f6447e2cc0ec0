"""Shared test fixtures for flat-tasks tests.

Provides:
- MockContext for isolating tests from global settings
- Temporary workspace fixtures
- Store, service and Flask client fixtures wired to a temporary task file
"""

import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Generator
from unittest.mock import patch

import pytest

from flat_tasks.config import (
    Settings,
    reload_settings,
    set_settings,
)
from flat_tasks.tasks import TaskService, TaskStore
from flat_tasks.web import create_app


class MockContext:
    """Context manager for isolating tests from global state.

    Handles:
    - Resetting the global settings singleton
    - Providing a temporary workspace directory
    - Clearing FLAT_TASKS_* environment variables

    Usage:
        with MockContext() as ctx:
            settings = ctx.settings
            workspace = ctx.workspace_dir
    """

    def __init__(self, **settings_kwargs):
        self._settings_kwargs = settings_kwargs
        self._temp_dir: tempfile.TemporaryDirectory | None = None
        self._settings: Settings | None = None
        self._original_env: dict[str, str] = {}

    def __enter__(self) -> "MockContext":
        self._temp_dir = tempfile.TemporaryDirectory()
        workspace_dir = Path(self._temp_dir.name)

        for var in list(os.environ):
            if var.startswith("FLAT_TASKS_"):
                self._original_env[var] = os.environ.pop(var)

        self._settings = Settings(
            workspace_dir=workspace_dir,
            **self._settings_kwargs,
        )
        set_settings(self._settings)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        os.environ.update(self._original_env)
        reload_settings()
        if self._temp_dir:
            self._temp_dir.cleanup()

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            raise RuntimeError("MockContext not entered")
        return self._settings

    @property
    def workspace_dir(self) -> Path:
        if self._temp_dir is None:
            raise RuntimeError("MockContext not entered")
        return Path(self._temp_dir.name)


class SequentialIds:
    """Deterministic id factory: t1, t2, t3, ..."""

    def __init__(self) -> None:
        self.count = 0

    def __call__(self) -> str:
        self.count += 1
        return f"t{self.count}"


FIXED_NOW = datetime(2024, 5, 1, 9, 30, 15)


@pytest.fixture
def mock_context() -> Generator[MockContext, None, None]:
    """Fixture providing an isolated test context."""
    with MockContext() as ctx:
        yield ctx


@pytest.fixture
def temp_workspace(tmp_path: Path) -> Path:
    """Fixture providing a temporary workspace directory."""
    workspace = tmp_path / "workspace"
    workspace.mkdir(parents=True)
    return workspace


@pytest.fixture
def settings(temp_workspace: Path) -> Settings:
    """Settings pointing at the temporary workspace, ignoring the environment."""
    with patch.dict(os.environ, {}, clear=True):
        return Settings(workspace_dir=temp_workspace)


@pytest.fixture
def tasks_path(temp_workspace: Path) -> Path:
    return temp_workspace / "tasks.json"


@pytest.fixture
def store(tasks_path: Path) -> TaskStore:
    return TaskStore(tasks_path)


@pytest.fixture
def service(store: TaskStore) -> TaskService:
    """Service with predictable ids and a frozen clock."""
    return TaskService(store, id_factory=SequentialIds(), clock=lambda: FIXED_NOW)


@pytest.fixture
def app(settings: Settings, service: TaskService):
    app = create_app(settings, service=service)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
