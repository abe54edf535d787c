"""Standard-library logging for the route layer and scripts.

Services and use cases emit structured events through logfire; plain
``logging`` is used where a request is accepted or denied.
"""

import logging
import sys

from presence.config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Libraries that log every request or statement at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access", "sqlalchemy.engine")


def setup_logging(settings: Settings) -> None:
    """Route all log records to stdout at the level implied by settings.

    Debug mode turns on DEBUG for presence and leaves SQL echo to the engine.
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging ready (environment=%s, level=%s)",
        settings.environment,
        logging.getLevelName(level),
    )
