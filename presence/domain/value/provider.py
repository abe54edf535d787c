"""Per-provider descriptor table.

Everything that differs between identity providers lives in one row of
PROVIDER_DESCRIPTORS: how to read the raw profile payload, which fields go
into the account sub-document, and how the default profile link looks.
Supporting a new provider means adding an AuthProvider member and a row here.
"""

from presence.domain.value.common import ValueObject
from presence.domain.value.types import AuthProvider, CanonicalIdentity


class ProviderDescriptor(ValueObject):
    """Capabilities and payload layout of one identity provider."""

    provider: AuthProvider
    display_name: str  # Link name shown on the profile
    icon: str  # Icon identifier understood by the frontend
    profile_url_template: str  # Formatted with username and provider_id

    # Raw payload field names
    id_field: str
    login_field: str | None = None  # None when the provider has no handle
    name_field: str = "name"
    email_field: str = "email"
    avatar_field: str | None = None

    # Account sub-document key -> raw payload field
    meta_fields: dict[str, str] = {}

    def profile_url(self, identity: CanonicalIdentity) -> str:
        """Build the public profile URL for an identity on this provider."""
        return self.profile_url_template.format(
            username=identity.username.root,
            provider_id=identity.provider_id,
        )


PROVIDER_DESCRIPTORS: dict[AuthProvider, ProviderDescriptor] = {
    AuthProvider.GITHUB: ProviderDescriptor(
        provider=AuthProvider.GITHUB,
        display_name="GitHub",
        icon="FaGithub",
        profile_url_template="https://github.com/{username}",
        id_field="id",
        login_field="login",
        avatar_field="avatar_url",
        meta_fields={
            "company": "company",
            "publicRepos": "public_repos",
            "followers": "followers",
            "following": "following",
        },
    ),
    AuthProvider.GOOGLE: ProviderDescriptor(
        provider=AuthProvider.GOOGLE,
        display_name="Google",
        icon="FaGoogle",
        profile_url_template="https://plus.google.com/{provider_id}",
        id_field="sub",
        avatar_field="picture",
        meta_fields={
            "email": "email",
            "name": "name",
            "picture": "picture",
        },
    ),
}


def get_descriptor(provider: AuthProvider) -> ProviderDescriptor:
    """Look up the descriptor for a provider.

    Raises:
        KeyError: If the provider has no descriptor row
    """
    return PROVIDER_DESCRIPTORS[provider]
