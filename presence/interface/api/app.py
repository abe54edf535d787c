"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from presence.config import Settings
from presence.interface.api.routes import auth, health
from presence.util.di.container import create_container, setup_di
from presence.util.observability import (
    instrument_fastapi,
    instrument_httpx,
)


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Logfire should be configured before calling this function; start_app.py
    does so in production.

    Args:
        container: DI container to use; the production container when omitted
    """
    settings = Settings()

    # Outbound calls to the payment provider
    instrument_httpx()

    app_instance = FastAPI(
        title="Presence API",
        description="Sign-in reconciliation for Presence profiles: accounts, profiles, links and billing",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    if settings.cors_origins:
        app_instance.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
            max_age=600,
        )

    setup_di(app_instance, container or create_container())

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)

    return app_instance


def app() -> FastAPI:
    """Application factory for uvicorn (``--factory``)."""
    return create_app()
