"""Account entity.

One account per user. Each provider the user signed in with contributes its
own sub-document; sub-documents of different providers never overwrite each
other.
"""

from datetime import datetime
from typing import Any

from pydantic import Field

from presence.domain.model.common import DomainModel
from presence.domain.value import AccountId, ProfileId, UserId


class ProviderAccountData(DomainModel):
    """Provider-specific account metadata (company, followers, picture...)."""

    data: dict[str, Any] = Field(default_factory=dict)
    updated_at: datetime = Field(default_factory=datetime.now)


class Account(DomainModel):
    """Per-user account holding provider metadata and profile associations."""

    id: AccountId
    user_id: UserId  # Immutable after creation
    providers: dict[str, ProviderAccountData] = Field(default_factory=dict)
    profile_ids: list[ProfileId] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
