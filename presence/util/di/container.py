"""Production container and its FastAPI hook-up."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from presence.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Container with every component's production implementation.

    Settings are read from the environment by ProdConfigProvider. The
    FastapiProvider makes the current Request resolvable in REQUEST scope.
    """
    providers = [get_provider(base)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container so DishkaRoute handlers can inject from it."""
    setup_dishka(container=container, app=app)
