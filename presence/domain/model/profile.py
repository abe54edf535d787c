"""Profile entity.

The public-facing presence of a user, keyed by a globally unique username.
"""

from datetime import datetime

from pydantic import Field

from presence.domain.model.common import DomainModel
from presence.domain.value import LinkId, ProfileId, UserId, Username


class Profile(DomainModel):
    """Public profile with an ordered list of links.

    The first link is the default/pinned one. ``name`` and ``bio`` are user
    editable and are never rewritten by later sign-ins.
    """

    id: ProfileId
    username: Username
    name: str | None = None
    bio: str | None = None
    user_id: UserId
    source: str = "database"
    links: list[LinkId] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
