"""Link entity."""

from datetime import datetime

from pydantic import Field

from presence.domain.model.common import DomainModel
from presence.domain.value import LinkId, ProfileId


class Link(DomainModel):
    """Outbound social or contact link owned by exactly one profile."""

    id: LinkId
    username: str
    name: str
    url: str
    icon: str
    is_enabled: bool = True
    is_pinned: bool = False
    animation: str | None = None
    profile_id: ProfileId
    created_at: datetime = Field(default_factory=datetime.now)
