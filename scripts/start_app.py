#!/usr/bin/env python3
"""Run the presence API under uvicorn.

Logfire and logging are configured before the app is imported so that
import-time failures (bad settings, missing billing key) are reported too.
"""

import sys

import logfire
import uvicorn

from presence.config import Settings
from presence.util.logging import setup_logging
from presence.util.observability import configure_logfire


def main() -> int:
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    logfire.info(
        "Starting presence API",
        host=settings.host,
        port=settings.port,
        environment=settings.environment,
    )
    try:
        uvicorn.run(
            "presence.interface.api.app:app",
            factory=True,
            host=settings.host,
            port=settings.port,
            log_config=None,  # keep the handlers installed by setup_logging
        )
    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
