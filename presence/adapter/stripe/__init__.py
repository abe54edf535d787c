"""Stripe billing adapter."""

from .client import (
    MockStripeBillingClient,
    RealStripeBillingClient,
    StripeBillingClient,
)

__all__ = [
    "MockStripeBillingClient",
    "RealStripeBillingClient",
    "StripeBillingClient",
]
