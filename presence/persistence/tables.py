"""SQLAlchemy table definitions for presence.

These match the schema created by the Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("email", String(255), nullable=True),
    Column("name", String(255), nullable=True),
    Column("account_type", String(20), nullable=True),  # 'free', 'premium'
    Column("billing_customer_id", String(255), nullable=True),  # Set once
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# USER IDENTITIES TABLE (written by the identity-protocol layer)
# ============================================================================
user_identities_table = Table(
    "user_identities",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "user_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("provider", String(50), nullable=False),  # 'github', 'google'
    Column("provider_user_id", String(255), nullable=False),
    Column("provider_handle", String(255), nullable=True),
    Column("provider_email", String(255), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("last_login_at", TIMESTAMP(timezone=True), nullable=True),
    UniqueConstraint("provider", "provider_user_id", name="uq_provider_identity"),
)

Index("idx_user_identities_user_id", user_identities_table.c.user_id)

# ============================================================================
# ACCOUNTS TABLE (one per user, provider sub-documents in JSONB)
# ============================================================================
accounts_table = Table(
    "accounts",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "user_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("providers", JSONB, nullable=False, server_default="{}"),
    Column(
        "profile_ids", ARRAY(UUID(as_uuid=True)), nullable=False, server_default="{}"
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", name="uq_accounts_user_id"),
)

# ============================================================================
# PROFILES TABLE (unique username, ordered link ids)
# ============================================================================
profiles_table = Table(
    "profiles",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("username", String(255), nullable=False),
    Column("name", String(255), nullable=True),
    Column("bio", Text, nullable=True),
    Column(
        "user_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("source", String(50), nullable=False, server_default="database"),
    Column("links", ARRAY(UUID(as_uuid=True)), nullable=False, server_default="{}"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("username", name="uq_profiles_username"),
)

Index("idx_profiles_user_id", profiles_table.c.user_id)

# ============================================================================
# LINKS TABLE
# ============================================================================
links_table = Table(
    "links",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("username", String(255), nullable=False),
    Column("name", String(255), nullable=False),
    Column("url", Text, nullable=False),
    Column("icon", String(100), nullable=False),
    Column("is_enabled", Boolean, nullable=False, server_default="true"),
    Column("is_pinned", Boolean, nullable=False, server_default="false"),
    Column("animation", String(50), nullable=True),
    Column(
        "profile_id",
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_links_profile_id", links_table.c.profile_id)
