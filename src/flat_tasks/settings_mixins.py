"""Settings mixins for application identity, the web server and logging.

AppSettingsMixin: Application identity and disk layout (app_name, workspace, tasks file).
ServerSettingsMixin: Bind address and request-handling options for the web server.
LoggingSettingsMixin: Log verbosity and output format.

These live outside config.py so each concern stays a small, composable unit.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator


class AppSettingsMixin:
    """Settings for application identity and disk layout.

    Mixin class that provides:
    - Application name and workspace directory
    - Path expansion for workspace_dir and tasks_file
    - The resolved location of the task list file

    Should be composed with BaseSettings via multiple inheritance.
    """

    app_name: str = Field(
        default="flat_tasks",
        title="App Name",
        description="Application name, also used for config directories",
    )

    workspace_dir: Path = Field(
        default_factory=lambda: Path.home() / ".flat_tasks",
        title="Workspace Directory",
        description="Directory holding the task list file",
    )

    tasks_file: Path | None = Field(
        default=None,
        title="Tasks File",
        description="Explicit task list location (defaults to <workspace>/tasks.json)",
    )

    @field_validator("workspace_dir", "tasks_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path | None) -> Path | None:
        """Expand ~ in paths."""
        if isinstance(v, str):
            return Path(v).expanduser()
        return v

    @property
    def tasks_path(self) -> Path:
        """Location of the persisted task collection."""
        if self.tasks_file is not None:
            return self.tasks_file
        return self.workspace_dir / "tasks.json"


class ServerSettingsMixin:
    """Settings for the HTTP front end."""

    host: str = Field(
        default="127.0.0.1",
        title="Host",
        description="Interface the development server binds to",
    )
    port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        title="Port",
        description="Port the development server listens on",
    )
    debug: bool = Field(
        default=False,
        title="Debug",
        description="Run Flask in debug mode",
    )
    serialize_writes: bool = Field(
        default=True,
        title="Serialize Writes",
        description="Hold an in-process lock around each load-mutate-save cycle",
    )


class LoggingSettingsMixin:
    """Settings for log output.

    Note: This is a mixin, not a BaseSettings subclass, to avoid
    MRO issues when composed with other settings classes.
    """

    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="warning",
        title="Log Level",
        description="Logging verbosity level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        title="Log Format",
        description="Log output format (console for dev, json for production)",
    )
