"""Unit tests for RelationshipMaterializer."""

import asyncio
from uuid import uuid4

import pytest

from kindred.domain.error import ValidationError
from kindred.domain.repository import MessageRepository, RelationshipRepository
from kindred.domain.service import RelationshipMaterializer
from kindred.domain.value import RelationshipId, RelationshipKind, UserId
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

PAIR = {UserId("alice"), UserId("bob")}


class TestMaterialize:
    """Tests for materialize method."""

    @pytest.mark.asyncio
    async def test_creates_relationship_and_seed(self, unit_env):
        """Materializing should store the aggregate and one unread seed message."""
        # Arrange
        materializer = await unit_env.get(RelationshipMaterializer)
        message_repo = await unit_env.get(MessageRepository)

        # Act
        relationship, created = await materializer.materialize(
            members=PAIR,
            kind=RelationshipKind.PRIVATE,
            seed_content="hello",
            seed_author=UserId("alice"),
        )

        # Assert
        assert created is True
        assert relationship.members == frozenset(PAIR)
        messages = await message_repo.find_by_relationship(relationship.id)
        assert len(messages) == 1
        assert messages[0].content == "hello"
        assert messages[0].is_unread is True

    @pytest.mark.asyncio
    async def test_existing_id_is_noop(self, unit_env):
        """Materializing a claimed id twice should write one seed message."""
        # Arrange
        materializer = await unit_env.get(RelationshipMaterializer)
        message_repo = await unit_env.get(MessageRepository)
        relationship_repo = await unit_env.get(RelationshipRepository)
        relationship_id = RelationshipId(uuid4())

        # Act
        first, first_created = await materializer.materialize(
            PAIR, RelationshipKind.PRIVATE, "hello", UserId("alice"), relationship_id
        )
        second, second_created = await materializer.materialize(
            PAIR, RelationshipKind.PRIVATE, "other", UserId("bob"), relationship_id
        )

        # Assert
        assert first_created is True
        assert second_created is False
        assert second.id == first.id
        assert relationship_repo.count() == 1
        messages = await message_repo.find_by_relationship(relationship_id)
        assert [m.content for m in messages] == ["hello"]

    @pytest.mark.asyncio
    async def test_concurrent_materialize_writes_one_seed(self, unit_env):
        """Racing materializations of one id should leave a single seed message."""
        # Arrange
        materializer = await unit_env.get(RelationshipMaterializer)
        message_repo = await unit_env.get(MessageRepository)
        relationship_id = RelationshipId(uuid4())

        # Act
        results = await asyncio.gather(
            *(
                materializer.materialize(
                    PAIR,
                    RelationshipKind.PRIVATE,
                    "hello",
                    UserId("alice"),
                    relationship_id,
                )
                for _ in range(3)
            )
        )

        # Assert
        assert [created for _, created in results].count(True) == 1
        assert len(await message_repo.find_by_relationship(relationship_id)) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "members,kind",
        [
            ({"alice"}, RelationshipKind.PRIVATE),
            ({"alice", "bob", "cleo"}, RelationshipKind.PRIVATE),
            ({"alice", "bob"}, RelationshipKind.GROUP),
        ],
    )
    async def test_member_count_must_fit_kind(self, unit_env, members, kind):
        """Private needs exactly two members and a group at least three."""
        # Arrange
        materializer = await unit_env.get(RelationshipMaterializer)
        relationship_repo = await unit_env.get(RelationshipRepository)

        # Act & Assert
        with pytest.raises(ValidationError):
            await materializer.materialize(
                {UserId(m) for m in members}, kind, "hello", UserId("alice")
            )
        assert relationship_repo.count() == 0

    @pytest.mark.asyncio
    async def test_seed_author_must_be_member(self, unit_env):
        """A seed author outside the member set should be rejected."""
        # Arrange
        materializer = await unit_env.get(RelationshipMaterializer)

        # Act & Assert
        with pytest.raises(ValidationError):
            await materializer.materialize(
                PAIR, RelationshipKind.PRIVATE, "hello", UserId("mallory")
            )
