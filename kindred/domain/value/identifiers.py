"""Strongly typed identifiers for Kindred domain entities.

Users are addressed by their platform handle, which the upstream gateway
injects on every request. Everything the engine creates gets a UUID.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", str)
RelationshipId = NewType("RelationshipId", UUID)
MessageId = NewType("MessageId", UUID)
InviteId = NewType("InviteId", UUID)
