"""Identity normalizer.

Maps a raw provider profile payload onto a CanonicalIdentity using the
provider descriptor table. Pure function, no I/O.
"""

from typing import Any, Mapping

from presence.domain.error import MalformedProfileError
from presence.domain.value import AuthProvider, CanonicalIdentity, Username
from presence.domain.value.provider import PROVIDER_DESCRIPTORS


def derive_username(login: str | None, email: str | None) -> str | None:
    """Pick the login handle, falling back to the local part of the email."""
    if login:
        return login
    if email and "@" in email:
        return email.split("@", 1)[0] or None
    return email or None


def normalize_identity(
    provider: AuthProvider | str, raw_profile: Mapping[str, Any]
) -> CanonicalIdentity:
    """Build a canonical identity from a raw provider profile.

    Args:
        provider: Provider that issued the profile
        raw_profile: Profile payload as returned by the provider

    Returns:
        Canonical identity

    Raises:
        MalformedProfileError: If the provider is unknown, the provider id is
            missing, or neither a login handle nor an email is present
    """
    try:
        provider = AuthProvider(provider)
    except ValueError:
        raise MalformedProfileError(str(provider), "unsupported provider")

    descriptor = PROVIDER_DESCRIPTORS.get(provider)
    if descriptor is None:
        raise MalformedProfileError(provider.value, "no provider descriptor")

    raw_id = raw_profile.get(descriptor.id_field)
    if raw_id is None or str(raw_id) == "":
        raise MalformedProfileError(provider.value, "missing provider id")

    login = raw_profile.get(descriptor.login_field) if descriptor.login_field else None
    email = raw_profile.get(descriptor.email_field)

    username = derive_username(login, email)
    if not username:
        raise MalformedProfileError(provider.value, "missing login handle and email")
    try:
        validated_username = Username(username)
    except ValueError as e:
        raise MalformedProfileError(provider.value, f"invalid username: {e}")

    avatar_url = (
        raw_profile.get(descriptor.avatar_field) if descriptor.avatar_field else None
    )

    return CanonicalIdentity(
        provider=provider,
        provider_id=str(raw_id),
        username=validated_username,
        display_name=raw_profile.get(descriptor.name_field) or username,
        email=email,
        avatar_url=avatar_url,
        provider_meta={
            key: raw_profile.get(field)
            for key, field in descriptor.meta_fields.items()
        },
    )
