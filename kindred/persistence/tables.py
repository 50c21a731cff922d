"""SQLAlchemy table definitions for Kindred.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Index,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# INTERACTION EDGES TABLE (one row per ordered pair)
# ============================================================================
interaction_edges_table = Table(
    "interaction_edges",
    metadata,
    Column("sender", String(255), primary_key=True),
    Column("receiver", String(255), primary_key=True),
    Column("kind", String(20), nullable=False),  # InteractionKind
    Column("status", String(20), nullable=False),
    Column("message", Text, nullable=True),  # Ping text
    Column("relationship_id", UUID(as_uuid=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_interaction_edges_receiver",
    interaction_edges_table.c.receiver,
    interaction_edges_table.c.updated_at.desc(),
)
Index(
    "idx_interaction_edges_sender_status",
    interaction_edges_table.c.sender,
    interaction_edges_table.c.status,
)

# ============================================================================
# RELATIONSHIPS TABLE (matches and groups)
# ============================================================================
relationships_table = Table(
    "relationships",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("members", ARRAY(String(255)), nullable=False),
    Column("kind", String(20), nullable=False),  # RelationshipKind
    Column("status", String(20), nullable=False, server_default="active"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_relationships_members",
    relationships_table.c.members,
    postgresql_using="gin",
)

# ============================================================================
# MESSAGES TABLE
# ============================================================================
messages_table = Table(
    "messages",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("relationship_id", UUID(as_uuid=True), nullable=False),
    Column("sender", String(255), nullable=False),
    Column("content", Text, nullable=False),
    Column("is_unread", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_messages_relationship_created",
    messages_table.c.relationship_id,
    messages_table.c.created_at.desc(),
)

# ============================================================================
# GROUP INVITES TABLE (proposals and per-member group records)
# ============================================================================
group_invites_table = Table(
    "group_invites",
    metadata,
    Column("subject", String(255), primary_key=True),
    Column("record_key", String(300), primary_key=True),
    Column("id", UUID(as_uuid=True), nullable=False),
    Column("record_type", String(20), nullable=False),  # InviteRecordType
    Column("inviter", String(255), nullable=False),
    Column("approver", String(255), nullable=False),
    Column("invitee", String(255), nullable=False),
    Column("status", String(20), nullable=False),
    Column("relationship_id", UUID(as_uuid=True), nullable=True),
    Column("members", ARRAY(String(255)), nullable=False, server_default="{}"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_group_invites_approver_status",
    group_invites_table.c.approver,
    group_invites_table.c.status,
)
Index("idx_group_invites_status", group_invites_table.c.status)

# ============================================================================
# PROFILES TABLE (owned by the profile service, read here)
# ============================================================================
profiles_table = Table(
    "profiles",
    metadata,
    Column("handle", String(255), primary_key=True),
    Column("name", String(255), nullable=True),
    Column("photo_url", Text, nullable=True),
)
