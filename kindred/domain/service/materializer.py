"""Relationship materializer."""

from uuid import uuid4, uuid5

import logfire

from kindred.domain.error import ConflictError, ValidationError
from kindred.domain.model import Message, Relationship
from kindred.domain.repository import MessageRepository, RelationshipRepository
from kindred.domain.value import (
    MessageId,
    RelationshipId,
    RelationshipKind,
    RelationshipStatus,
    UserId,
)

from .base import Service


class RelationshipMaterializer(Service):
    """Creates relationship aggregates and their seed messages."""

    def __init__(
        self,
        relationship_repository: RelationshipRepository,
        message_repository: MessageRepository,
    ) -> None:
        """Initialize materializer.

        Args:
            relationship_repository: Relationship repository
            message_repository: Message repository
        """
        self.relationship_repository = relationship_repository
        self.message_repository = message_repository

    async def materialize(
        self,
        members: set[UserId],
        kind: RelationshipKind,
        seed_content: str,
        seed_author: UserId,
        relationship_id: RelationshipId | None = None,
    ) -> tuple[Relationship, bool]:
        """Create a relationship and its seed message.

        Writing an id that already exists returns the stored aggregate and
        writes no second seed message, so callers can repeat this after a
        partial failure.

        Args:
            members: Member handles
            kind: Private match or group
            seed_content: Text of the first message
            seed_author: Member credited with the first message
            relationship_id: Id claimed by the caller, generated when None

        Returns:
            Tuple of (relationship, whether this call created it)

        Raises:
            ValidationError: If the member count does not fit the kind
        """
        self._validate_members(members, kind, seed_author)
        relationship_id = relationship_id or RelationshipId(uuid4())

        with logfire.span(
            "materializer.materialize",
            relationship_id=str(relationship_id),
            kind=kind.value,
            member_count=len(members),
        ):
            relationship = Relationship(
                id=relationship_id,
                members=frozenset(members),
                kind=kind,
                status=RelationshipStatus.ACTIVE,
            )
            try:
                relationship = await self.relationship_repository.create(relationship)
            except ConflictError:
                existing = await self.relationship_repository.find_by_id(
                    relationship_id
                )
                if existing is None:
                    raise
                logfire.info(
                    "Relationship already materialized",
                    relationship_id=str(relationship_id),
                )
                # A crash between the two writes leaves a relationship without a seed
                if not await self.message_repository.find_by_relationship(
                    relationship_id, limit=1
                ):
                    await self._write_seed(relationship_id, seed_content, seed_author)
                return existing, False

            await self._write_seed(relationship_id, seed_content, seed_author)
            logfire.info(
                "Relationship materialized",
                relationship_id=str(relationship_id),
                kind=kind.value,
                seed_author=seed_author,
            )
            return relationship, True

    @staticmethod
    def _validate_members(
        members: set[UserId], kind: RelationshipKind, seed_author: UserId
    ) -> None:
        if kind == RelationshipKind.PRIVATE and len(members) != 2:
            raise ValidationError("A private relationship has exactly two members")
        if kind == RelationshipKind.GROUP and len(members) < 3:
            raise ValidationError("A group needs at least three members")
        if seed_author not in members:
            raise ValidationError("The seed message author must be a member")

    async def _write_seed(
        self, relationship_id: RelationshipId, content: str, author: UserId
    ) -> Message:
        # Seed id is derived from the relationship so a repeated write replaces it
        return await self.message_repository.save(
            Message(
                id=MessageId(uuid5(relationship_id, "seed")),
                relationship_id=relationship_id,
                sender=author,
                content=content,
                is_unread=True,
            )
        )
