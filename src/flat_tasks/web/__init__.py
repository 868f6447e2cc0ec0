"""HTTP surface for the task list."""

from flat_tasks.web.app import build_service, create_app
from flat_tasks.web.handler import HandlerResult, RequestHandler

__all__ = ["create_app", "build_service", "RequestHandler", "HandlerResult"]
