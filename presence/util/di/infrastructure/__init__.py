"""Infrastructure providers."""

# Import bases
from .billing import BillingProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .billing import ProdBillingProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "BillingProvider",
    "PersistenceProvider",
    "ProdBillingProvider",
    "ProdPersistenceProvider",
]
