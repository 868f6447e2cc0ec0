"""Exception types raised by the task list application."""


class FlatTasksError(Exception):
    """Base class for application errors."""

    pass


class StoreError(FlatTasksError):
    """Raised when the task list file cannot be written."""

    def __init__(self, path, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")
