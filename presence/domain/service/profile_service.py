"""Profile domain service."""

from uuid import uuid4

import logfire

from presence.config import ReconciliationSettings, StoreSettings
from presence.domain.error import StoreUnavailableError, UsernameConflictError
from presence.domain.model import Link, Profile
from presence.domain.repository import LinkRepository, ProfileRepository
from presence.domain.value import (
    CanonicalIdentity,
    LinkId,
    ProfileId,
    UserId,
    get_descriptor,
)

from .base import Service, bounded

DEFAULT_LINK_ANIMATION = "glow"


def build_default_link(profile_id: ProfileId, identity: CanonicalIdentity) -> Link:
    """Build the provider-derived default link for a profile."""
    descriptor = get_descriptor(identity.provider)
    return Link(
        id=LinkId(uuid4()),
        username=identity.username.root,
        name=descriptor.display_name,
        url=descriptor.profile_url(identity),
        icon=descriptor.icon,
        is_enabled=True,
        is_pinned=True,
        animation=DEFAULT_LINK_ANIMATION,
        profile_id=profile_id,
    )


class ProfileService(Service):
    """Domain service for profile and link operations."""

    def __init__(
        self,
        profile_repository: ProfileRepository,
        link_repository: LinkRepository,
        store_settings: StoreSettings,
        reconciliation_settings: ReconciliationSettings,
    ) -> None:
        """Initialize profile service.

        Args:
            profile_repository: Profile repository
            link_repository: Link repository
            store_settings: Store call limits
            reconciliation_settings: Defaults for new profiles
        """
        self.profile_repository = profile_repository
        self.link_repository = link_repository
        self.timeout = store_settings.timeout_seconds
        self.default_bio = reconciliation_settings.default_bio

    async def get_profile(self, profile_id: ProfileId) -> Profile | None:
        """Get profile by ID."""
        return await bounded(
            self.profile_repository.find_by_id(profile_id),
            self.timeout,
            StoreUnavailableError,
            "find profile",
        )

    async def find_or_create_profile(
        self, user_id: UserId, identity: CanonicalIdentity
    ) -> tuple[Profile, bool]:
        """Find the profile for the identity's username or create it.

        An existing profile is returned untouched so user edits to name and
        bio survive later sign-ins.

        Args:
            user_id: User the profile should belong to
            identity: Normalized identity

        Returns:
            Tuple of (profile, created)

        Raises:
            UsernameConflictError: If the username belongs to another user
        """
        with logfire.span(
            "profile_service.find_or_create_profile",
            user_id=str(user_id),
            username=identity.username.root,
        ):
            defaults = Profile(
                id=ProfileId(uuid4()),
                username=identity.username,
                name=identity.display_name,
                bio=self.default_bio,
                user_id=user_id,
                source="database",
            )
            profile, created = await bounded(
                self.profile_repository.find_or_create(defaults),
                self.timeout,
                StoreUnavailableError,
                "find or create profile",
            )

            if not created and profile.user_id != user_id:
                logfire.error(
                    "Username owned by another user",
                    username=identity.username.root,
                    owner_id=str(profile.user_id),
                    user_id=str(user_id),
                )
                raise UsernameConflictError(
                    identity.username.root, str(profile.user_id), str(user_id)
                )

            logfire.info(
                "Profile created" if created else "Profile found",
                username=identity.username.root,
                profile_id=str(profile.id),
                links=len(profile.links),
            )
            return profile, created

    async def ensure_default_link(
        self, profile: Profile, identity: CanonicalIdentity
    ) -> Link | None:
        """Give a linkless profile its default link.

        The link is inserted first and then claims the profile's empty link
        list atomically. If another sign-in claimed it first, the inserted
        link is removed again.

        Args:
            profile: Profile to attach the link to
            identity: Identity the link is derived from

        Returns:
            The attached link, or None if the profile already had links
        """
        with logfire.span(
            "profile_service.ensure_default_link",
            profile_id=str(profile.id),
            provider=identity.provider.value,
        ):
            link = build_default_link(profile.id, identity)
            await bounded(
                self.link_repository.create(link),
                self.timeout,
                StoreUnavailableError,
                "create link",
            )

            updated = await bounded(
                self.profile_repository.append_link(
                    profile.id, link.id, only_if_empty=True
                ),
                self.timeout,
                StoreUnavailableError,
                "append link",
            )
            if updated is None:
                logfire.info(
                    "Profile already has links, discarding default link",
                    profile_id=str(profile.id),
                    link_id=str(link.id),
                )
                await bounded(
                    self.link_repository.delete(link.id),
                    self.timeout,
                    StoreUnavailableError,
                    "delete link",
                )
                return None

            logfire.info(
                "Default link attached",
                profile_id=str(profile.id),
                link_id=str(link.id),
                url=link.url,
            )
            return link
