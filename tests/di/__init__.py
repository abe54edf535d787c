"""Mock providers for testing."""

from .billing import MockBillingProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockBillingProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
