"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand.
"""

from enum import Enum
from typing import Any, Dict
from uuid import UUID

from kindred.domain.model import GroupInvite, InteractionEdge, Message, Relationship
from kindred.domain.value import (
    EdgeStatus,
    InteractionKind,
    InviteId,
    InviteRecordType,
    InviteStatus,
    MessageId,
    ProfileSummary,
    RelationshipId,
    RelationshipKind,
    RelationshipStatus,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> UUID | None:
    return _uuid(value) if value is not None else None


def _to_columns(data: Dict[str, Any]) -> Dict[str, Any]:
    # Enum members are stored as their plain string values
    return {k: v.value if isinstance(v, Enum) else v for k, v in data.items()}


def row_to_edge(row: Dict[str, Any]) -> InteractionEdge:
    """Convert database row to InteractionEdge domain model.

    Args:
        row: Database row as dict

    Returns:
        InteractionEdge domain model
    """
    relationship_id = _optional_uuid(row.get("relationship_id"))
    return InteractionEdge(
        sender=UserId(row["sender"]),
        receiver=UserId(row["receiver"]),
        kind=InteractionKind(row["kind"]),
        status=EdgeStatus(row["status"]),
        message=row.get("message"),
        relationship_id=RelationshipId(relationship_id) if relationship_id else None,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def edge_to_dict(edge: InteractionEdge) -> Dict[str, Any]:
    """Convert InteractionEdge domain model to database dict.

    Args:
        edge: InteractionEdge domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return _to_columns(edge.model_dump())


def row_to_relationship(row: Dict[str, Any]) -> Relationship:
    """Convert database row to Relationship domain model."""
    return Relationship(
        id=RelationshipId(_uuid(row["id"])),
        members=frozenset(UserId(m) for m in row["members"]),
        kind=RelationshipKind(row["kind"]),
        status=RelationshipStatus(row["status"]),
        created_at=row["created_at"],
    )


def relationship_to_dict(relationship: Relationship) -> Dict[str, Any]:
    """Convert Relationship domain model to database dict.

    Members are stored sorted so equal sets produce equal arrays.
    """
    data = _to_columns(relationship.model_dump())
    data["members"] = sorted(relationship.members)
    return data


def row_to_message(row: Dict[str, Any]) -> Message:
    """Convert database row to Message domain model."""
    return Message(
        id=MessageId(_uuid(row["id"])),
        relationship_id=RelationshipId(_uuid(row["relationship_id"])),
        sender=UserId(row["sender"]),
        content=row["content"],
        is_unread=row["is_unread"],
        created_at=row["created_at"],
    )


def message_to_dict(message: Message) -> Dict[str, Any]:
    """Convert Message domain model to database dict."""
    return _to_columns(message.model_dump())


def row_to_group_invite(row: Dict[str, Any]) -> GroupInvite:
    """Convert database row to GroupInvite domain model."""
    relationship_id = _optional_uuid(row.get("relationship_id"))
    return GroupInvite(
        id=InviteId(_uuid(row["id"])),
        subject=UserId(row["subject"]),
        record_key=row["record_key"],
        record_type=InviteRecordType(row["record_type"]),
        inviter=UserId(row["inviter"]),
        approver=UserId(row["approver"]),
        invitee=UserId(row["invitee"]),
        status=InviteStatus(row["status"]),
        relationship_id=RelationshipId(relationship_id) if relationship_id else None,
        members=[UserId(m) for m in row.get("members") or []],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def group_invite_to_dict(record: GroupInvite) -> Dict[str, Any]:
    """Convert GroupInvite domain model to database dict."""
    return _to_columns(record.model_dump())


def row_to_profile(row: Dict[str, Any]) -> ProfileSummary:
    """Convert database row to ProfileSummary value object."""
    return ProfileSummary(
        handle=UserId(row["handle"]),
        name=row.get("name"),
        photo_url=row.get("photo_url"),
    )
