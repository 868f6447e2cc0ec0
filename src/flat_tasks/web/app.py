"""Flask front end for the task list.

A single endpoint: GET renders the list, POST carries one of the
add/toggle/delete actions and is answered with a redirect back to GET.
"""

from flask import Flask, redirect, render_template, request, url_for
from markupsafe import Markup

from flat_tasks.config import Settings, get_settings
from flat_tasks.errors import StoreError
from flat_tasks.logging import Loggers, bind_context, clear_context
from flat_tasks.tasks import TaskService, TaskStore
from flat_tasks.web.handler import RequestHandler

logger = Loggers.web()

EXTENSION_KEY = "flat_tasks"


def build_service(settings: Settings) -> TaskService:
    """Create the task service for the configured task file."""
    return TaskService(
        TaskStore(settings.tasks_path),
        serialize_writes=settings.serialize_writes,
    )


def create_app(
    settings: Settings | None = None,
    service: TaskService | None = None,
) -> Flask:
    """Application factory.

    Args:
        settings: Settings to use; defaults to get_settings().
        service: Prebuilt service, mainly for tests.

    Returns:
        The configured Flask application.
    """
    settings = settings or get_settings()
    service = service or build_service(settings)

    app = Flask(__name__)
    app.config["DEBUG"] = settings.debug
    app.extensions[EXTENSION_KEY] = service
    handler = RequestHandler(service)

    @app.before_request
    def _bind_request_context() -> None:
        bind_context(method=request.method, path=request.path)

    @app.teardown_request
    def _clear_request_context(exc: BaseException | None) -> None:
        clear_context()

    @app.errorhandler(StoreError)
    def _store_error(e: StoreError):
        logger.exception("store_write_failed", path=str(e.path))
        return "Could not save tasks.", 500

    # Titles are escaped when the task is created
    app.jinja_env.filters["stored_title"] = Markup

    @app.route("/", methods=["GET", "POST"])
    def index():
        result = handler.handle(request.method, request.form)
        if result.redirect:
            return redirect(url_for("index"), code=303)
        return render_template("index.html", tasks=result.tasks)

    return app
