"""initial_schema

Create the schema for the Kindred interaction engine:
- Interaction edges (one row per ordered sender/receiver pair)
- Relationships (private matches and groups)
- Messages (seed message and later chat)
- Group invites (proposals and per-member group records)
- Profiles (directory read by invite validation and listings)

Revision ID: 3c1f7a92d4e0
Revises:
Create Date: 2026-10-19 10:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f7a92d4e0"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # INTERACTION_EDGES table
    # ========================================================================
    op.create_table(
        "interaction_edges",
        sa.Column("sender", sa.String(255), nullable=False),
        sa.Column("receiver", sa.String(255), nullable=False),
        sa.Column("kind", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("relationship_id", sa.UUID(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("sender", "receiver"),
    )
    op.create_index(
        "idx_interaction_edges_receiver",
        "interaction_edges",
        ["receiver", sa.text("updated_at DESC")],
    )
    op.create_index(
        "idx_interaction_edges_sender_status",
        "interaction_edges",
        ["sender", "status"],
    )

    # ========================================================================
    # RELATIONSHIPS table
    # ========================================================================
    op.create_table(
        "relationships",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("members", postgresql.ARRAY(sa.String(255)), nullable=False),
        sa.Column("kind", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_relationships_members",
        "relationships",
        ["members"],
        postgresql_using="gin",
    )

    # ========================================================================
    # MESSAGES table
    # ========================================================================
    op.create_table(
        "messages",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("relationship_id", sa.UUID(), nullable=False),
        sa.Column("sender", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("is_unread", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_messages_relationship_created",
        "messages",
        ["relationship_id", sa.text("created_at DESC")],
    )

    # ========================================================================
    # GROUP_INVITES table
    # ========================================================================
    op.create_table(
        "group_invites",
        sa.Column("subject", sa.String(255), nullable=False),
        sa.Column("record_key", sa.String(300), nullable=False),
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("record_type", sa.String(20), nullable=False),
        sa.Column("inviter", sa.String(255), nullable=False),
        sa.Column("approver", sa.String(255), nullable=False),
        sa.Column("invitee", sa.String(255), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("relationship_id", sa.UUID(), nullable=True),
        sa.Column(
            "members",
            postgresql.ARRAY(sa.String(255)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("subject", "record_key"),
    )
    op.create_index(
        "idx_group_invites_approver_status",
        "group_invites",
        ["approver", "status"],
    )
    op.create_index("idx_group_invites_status", "group_invites", ["status"])

    # ========================================================================
    # PROFILES table
    # ========================================================================
    op.create_table(
        "profiles",
        sa.Column("handle", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("photo_url", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("handle"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("profiles")
    op.drop_index("idx_group_invites_status", table_name="group_invites")
    op.drop_index("idx_group_invites_approver_status", table_name="group_invites")
    op.drop_table("group_invites")
    op.drop_index("idx_messages_relationship_created", table_name="messages")
    op.drop_table("messages")
    op.drop_index("idx_relationships_members", table_name="relationships")
    op.drop_table("relationships")
    op.drop_index("idx_interaction_edges_sender_status", table_name="interaction_edges")
    op.drop_index("idx_interaction_edges_receiver", table_name="interaction_edges")
    op.drop_table("interaction_edges")
