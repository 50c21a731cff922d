"""PostgreSQL repository implementations."""

from kindred.persistence.repository.edge import PostgresEdgeRepository
from kindred.persistence.repository.invite import PostgresGroupInviteRepository
from kindred.persistence.repository.message import PostgresMessageRepository
from kindred.persistence.repository.profile import PostgresProfileRepository
from kindred.persistence.repository.relationship import (
    PostgresRelationshipRepository,
)

__all__ = [
    "PostgresEdgeRepository",
    "PostgresRelationshipRepository",
    "PostgresMessageRepository",
    "PostgresGroupInviteRepository",
    "PostgresProfileRepository",
]
