"""Domain value objects for Kindred.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from kindred.domain.value.common import ValueObject
from kindred.domain.value.identifiers import UserId


class InteractionKind(str, Enum):
    """Kind of intent recorded on an edge."""

    LIKE = "like"
    DISLIKE = "dislike"
    PING = "ping"
    INVITE = "invite"


class InteractionAction(str, Enum):
    """Actions accepted by the resolver."""

    LIKE = "like"
    DISLIKE = "dislike"
    PING = "ping"
    APPROVE = "approve"
    REJECT = "reject"


class EdgeStatus(str, Enum):
    """Status of a directed interaction edge.

    ``rejected`` is still read from older records and is treated exactly
    like ``declined``.
    """

    PENDING = "pending"
    MATCH = "match"
    DECLINED = "declined"
    REJECTED = "rejected"
    APPROVED = "approved"

    @property
    def is_terminal_refusal(self) -> bool:
        return self in (EdgeStatus.DECLINED, EdgeStatus.REJECTED)


class RelationshipKind(str, Enum):
    """Kind of relationship aggregate."""

    PRIVATE = "private"
    GROUP = "group"


class RelationshipStatus(str, Enum):
    """Lifecycle of a relationship."""

    ACTIVE = "active"
    ARCHIVED = "archived"


class InviteStatus(str, Enum):
    """Status of a group invite record.

    Proposals move from pending to approved or declined. Group membership
    records written on approval are active.
    """

    PENDING = "pending"
    APPROVED = "approved"
    DECLINED = "declined"
    ACTIVE = "active"


class InviteRecordType(str, Enum):
    """Type of record stored in the group invite table."""

    PROPOSAL = "group_invite"
    GROUP = "group_chat"


class ProfileSummary(ValueObject):
    """Counterpart summary shown next to edges, relationships and invites."""

    handle: UserId
    name: str | None = None
    photo_url: str | None = None
