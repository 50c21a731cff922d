"""Group invite records.

Proposals and the group membership records they produce share one table.
A proposal is keyed by (inviter, "invite#<invitee>"); once approved, one
group record per member is keyed by (member, "group#<relationship id>").
"""

from datetime import datetime

from pydantic import Field

from kindred.domain.model.common import DomainModel, utcnow
from kindred.domain.value import (
    InviteId,
    InviteRecordType,
    InviteStatus,
    RelationshipId,
    UserId,
)

PROPOSAL_KEY_PREFIX = "invite#"
GROUP_KEY_PREFIX = "group#"


def proposal_key(invitee: UserId) -> str:
    return f"{PROPOSAL_KEY_PREFIX}{invitee}"


def group_key(relationship_id: RelationshipId) -> str:
    return f"{GROUP_KEY_PREFIX}{relationship_id}"


class GroupInvite(DomainModel):
    """Invite proposal or group membership record.

    Business rules:
    - Inviter, approver and invitee are distinct users
    - One live proposal per (inviter, invitee)
    - Only the approver can resolve a proposal
    - Approved proposals carry the id of the group they produced
    """

    id: InviteId
    subject: UserId  # Partition owner: inviter for proposals, member for groups
    record_key: str
    record_type: InviteRecordType
    inviter: UserId
    approver: UserId
    invitee: UserId
    status: InviteStatus
    relationship_id: RelationshipId | None = None
    members: list[UserId] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def key(self) -> str:
        return f"{self.subject}:{self.record_key}"

    def advance(self, **changes) -> "GroupInvite":
        """Copy of this record with ``changes`` applied and a fresh updated_at."""
        return self.model_copy(update={**changes, "updated_at": utcnow()})
