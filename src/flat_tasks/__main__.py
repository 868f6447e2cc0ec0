"""Entry point: python -m flat_tasks"""

import sys

from flat_tasks.config import SettingsValidationError, get_settings, validate_settings
from flat_tasks.logging import Loggers, configure_logging
from flat_tasks.web import create_app


def main() -> int:
    settings = get_settings()
    configure_logging(settings)
    logger = Loggers.config()

    try:
        validate_settings(settings)
    except SettingsValidationError as e:
        logger.error("invalid_settings", error=str(e))
        return 1

    logger.info("starting_server", host=settings.host, port=settings.port, tasks_file=str(settings.tasks_path))
    app = create_app(settings)
    app.run(host=settings.host, port=settings.port, debug=settings.debug)
    return 0


if __name__ == "__main__":
    sys.exit(main())
