"""Domain services."""

from .account_service import AccountOwner, AccountService
from .base import Service
from .billing_service import BillingClient, BillingService
from .identity_normalizer import normalize_identity
from .jwt_service import JWTService
from .profile_service import ProfileService, build_default_link
from .user_service import UserService

__all__ = [
    "AccountOwner",
    "AccountService",
    "BillingClient",
    "BillingService",
    "JWTService",
    "ProfileService",
    "Service",
    "UserService",
    "build_default_link",
    "normalize_identity",
]
