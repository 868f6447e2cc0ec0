"""Framework-independent request handling.

One inbound request maps to at most one TaskService call. Mutations
answer with a redirect so a browser refresh does not resubmit the form;
everything else falls through to displaying the current list.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from flat_tasks.logging import Loggers
from flat_tasks.tasks import Task, TaskService

logger = Loggers.web()

# action -> required form field
ACTIONS: dict[str, str] = {
    "add": "title",
    "toggle": "task_id",
    "delete": "task_id",
}


@dataclass
class HandlerResult:
    """Outcome of handling one request.

    Either ``redirect`` is set, or ``tasks`` holds the list to render.
    """

    redirect: bool = False
    tasks: list[Task] = field(default_factory=list)


class RequestHandler:
    """Translate form submissions into task operations."""

    def __init__(self, service: TaskService) -> None:
        self._service = service

    def handle(self, method: str, form: Mapping[str, str]) -> HandlerResult:
        """Handle a request.

        Args:
            method: HTTP method of the request.
            form: Submitted form fields (ignored unless method is POST).

        Returns:
            A redirect after a mutation, otherwise the list to display.
        """
        if method.upper() == "POST":
            action = form.get("action")
            required = ACTIONS.get(action) if action else None
            if required is not None and required in form:
                self._dispatch(action, form[required])
                return HandlerResult(redirect=True)
            logger.debug("request_not_mutating", action=action)

        return HandlerResult(tasks=self._service.list())

    def _dispatch(self, action: str, value: str) -> None:
        logger.debug("request_mutating", action=action)
        if action == "add":
            self._service.add(value)
        elif action == "toggle":
            self._service.toggle(value)
        elif action == "delete":
            self._service.delete(value)
