"""User aggregate root.

Users are created by the identity-protocol layer on their first-ever
authentication. Reconciliation only ever sets the billing customer id and
the account type.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from presence.domain.model.common import DomainModel
from presence.domain.value import AccountType, UserId


class User(DomainModel):
    """Internal identity root."""

    id: UserId
    email: Optional[str] = None
    name: Optional[str] = None
    account_type: Optional[AccountType] = None  # Unset reads as free
    billing_customer_id: Optional[str] = None  # Set exactly once
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
