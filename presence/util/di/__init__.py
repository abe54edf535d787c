"""Dependency injection wiring for presence."""

from typing import Type

from presence.util.di.application import ProdApplicationProvider
from presence.util.di.base import Component, ProviderBase
from presence.util.di.core import ProdConfigProvider
from presence.util.di.domain import ProdDomainProvider
from presence.util.di.infrastructure import (
    BillingProvider,
    PersistenceProvider,
    ProdBillingProvider,
    ProdPersistenceProvider,
)

# Order is irrelevant to dishka; grouped by layer for reading
PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
    BillingProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a provider entry of PROVIDERS to the class to instantiate.

    Component bases are resolved to their production or mock subclass.
    Mock subclasses live under tests/ and only exist once tests.di has been
    imported.

    Raises:
        ValueError: If the component has no implementation of that kind
    """
    implementations = {
        getattr(cls, "__is_mock__", False): cls for cls in base.__subclasses__()
    }
    if not implementations:
        return base

    try:
        return implementations[use_mock]
    except KeyError:
        kind = "mock" if use_mock else "production"
        raise ValueError(
            f"No {kind} implementation for component {base.__mock_component__!r}"
        ) from None


__all__ = [
    "BillingProvider",
    "Component",
    "PROVIDERS",
    "PersistenceProvider",
    "ProdApplicationProvider",
    "ProdBillingProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdPersistenceProvider",
    "ProviderBase",
    "get_provider",
]
