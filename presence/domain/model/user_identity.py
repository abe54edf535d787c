"""User identity entity.

Links a provider account to an internal user. Written by the
identity-protocol layer; reconciliation only reads it.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from presence.domain.model.common import DomainModel
from presence.domain.value import AuthProvider, UserId, UserIdentityId


class UserIdentity(DomainModel):
    """External provider identity linked to a user."""

    id: UserIdentityId
    user_id: UserId
    provider: AuthProvider
    provider_user_id: str  # Permanent id from the provider
    provider_handle: Optional[str] = None
    provider_email: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
    last_login_at: Optional[datetime] = None
