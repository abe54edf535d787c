"""Logfire setup and library instrumentation.

Services report through logfire directly:

    with logfire.span("reconcile_sign_in", user_id=user_id):
        logfire.info("Profile created", username=username)

Raw provider profiles and payment credentials pass through several spans, so
their attribute names are added to Logfire's scrubbing patterns.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from presence.config import Settings

SERVICE_NAME = "presence"
SERVICE_VERSION = "0.1.0"

# Attribute names whose values are redacted before export
SCRUB_PATTERNS = ["raw_profile", "api_key", "auth_token", "jwt_secret"]


def _should_send(settings: Settings) -> bool:
    explicit = settings.observability.send_to_logfire
    if explicit is not None:
        return explicit
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once at process start.

    Without a token (and without OBSERVABILITY__SEND_TO_LOGFIRE=true) events
    only go to the console.
    """
    send_to_logfire = _should_send(settings)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=SERVICE_VERSION,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUB_PATTERNS),
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every HTTP request; headers stay out because they carry cookies."""
    logfire.instrument_fastapi(app, capture_headers=False)


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL statements, tagging them with the current span."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)


def instrument_httpx() -> None:
    """Trace outbound calls to the payment provider."""
    logfire.instrument_httpx()
