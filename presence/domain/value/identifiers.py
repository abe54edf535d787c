"""Strongly typed identifiers for presence entities.

Using NewType keeps user, profile and link ids from being mixed up.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
UserIdentityId = NewType("UserIdentityId", UUID)
AccountId = NewType("AccountId", UUID)
ProfileId = NewType("ProfileId", UUID)
LinkId = NewType("LinkId", UUID)
