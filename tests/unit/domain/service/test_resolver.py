"""Unit tests for MutualIntentResolver."""

import asyncio
from uuid import uuid4

import pytest

from kindred.config import MatchingSettings
from kindred.domain.error import (
    AlreadyResolvedError,
    ConflictError,
    NotFoundError,
    UnsupportedActionError,
    ValidationError,
)
from kindred.domain.model import InteractionEdge
from kindred.domain.repository import (
    EdgeRepository,
    MessageRepository,
    RelationshipRepository,
)
from kindred.domain.service import (
    MutualIntentResolver,
    PingApprovalService,
    RelationshipMaterializer,
)
from kindred.domain.value import (
    EdgeStatus,
    InteractionKind,
    RelationshipId,
    RelationshipKind,
    UserId,
)
from kindred.persistence.repository.inmemory import InMemoryEdgeRepository
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()

ALICE = UserId("alice")
BOB = UserId("bob")


class TestLike:
    """Tests for the like action."""

    @pytest.mark.asyncio
    async def test_first_like_is_pending(self, unit_env):
        """A like with no reverse edge should leave the sender's edge pending."""
        # Arrange
        resolver = await unit_env.get(MutualIntentResolver)
        edge_repo = await unit_env.get(EdgeRepository)
        relationship_repo = await unit_env.get(RelationshipRepository)

        # Act
        resolution = await resolver.resolve(ALICE, BOB, "like", "like")

        # Assert
        assert resolution.status == EdgeStatus.PENDING
        assert resolution.relationship_id is None

        edge = await edge_repo.find(ALICE, BOB)
        assert edge.kind == InteractionKind.LIKE
        assert edge.status == EdgeStatus.PENDING
        assert await edge_repo.find(BOB, ALICE) is None
        assert relationship_repo.count() == 0

    @pytest.mark.asyncio
    async def test_mutual_like_matches_both_edges(self, unit_env):
        """A like answering a pending like should match both edges with one id."""
        # Arrange
        resolver = await unit_env.get(MutualIntentResolver)
        edge_repo = await unit_env.get(EdgeRepository)
        message_repo = await unit_env.get(MessageRepository)
        relationship_repo = await unit_env.get(RelationshipRepository)
        settings = await unit_env.get(MatchingSettings)
        await resolver.resolve(ALICE, BOB, "like", "like")

        # Act
        resolution = await resolver.resolve(BOB, ALICE, "like", "like")

        # Assert
        assert resolution.status == EdgeStatus.MATCH
        assert resolution.relationship_id is not None
        assert resolution.created is True

        forward = await edge_repo.find(ALICE, BOB)
        reverse = await edge_repo.find(BOB, ALICE)
        assert forward.is_matched_to(resolution.relationship_id)
        assert reverse.is_matched_to(resolution.relationship_id)

        relationship = await relationship_repo.find_by_id(resolution.relationship_id)
        assert relationship.members == frozenset({ALICE, BOB})
        assert relationship.kind == RelationshipKind.PRIVATE

        messages = await message_repo.find_by_relationship(resolution.relationship_id)
        assert len(messages) == 1
        assert messages[0].content == settings.match_seed_message
        assert messages[0].sender == BOB
        assert messages[0].is_unread is True

    @pytest.mark.asyncio
    async def test_like_on_matched_pair_is_idempotent(self, unit_env):
        """Liking again after a match should return the same relationship."""
        # Arrange
        resolver = await unit_env.get(MutualIntentResolver)
        message_repo = await unit_env.get(MessageRepository)
        relationship_repo = await unit_env.get(RelationshipRepository)
        await resolver.resolve(ALICE, BOB, "like", "like")
        matched = await resolver.resolve(BOB, ALICE, "like", "like")

        # Act
        again = await resolver.resolve(ALICE, BOB, "like", "like")

        # Assert
        assert again.status == EdgeStatus.MATCH
        assert again.relationship_id == matched.relationship_id
        assert again.created is False
        assert relationship_repo.count() == 1
        assert len(await message_repo.find_by_relationship(matched.relationship_id)) == 1

    @pytest.mark.asyncio
    async def test_like_after_own_dislike_is_pending_again(self, unit_env):
        """A fresh like should replace the sender's own earlier dislike."""
        # Arrange
        resolver = await unit_env.get(MutualIntentResolver)
        edge_repo = await unit_env.get(EdgeRepository)
        await resolver.resolve(ALICE, BOB, "dislike", "dislike")

        # Act
        resolution = await resolver.resolve(ALICE, BOB, "like", "like")

        # Assert
        assert resolution.status == EdgeStatus.PENDING
        edge = await edge_repo.find(ALICE, BOB)
        assert edge.kind == InteractionKind.LIKE

    @pytest.mark.asyncio
    async def test_like_does_not_match_declined_counterpart(self, unit_env):
        """A like toward someone who disliked the sender should stay pending."""
        # Arrange
        resolver = await unit_env.get(MutualIntentResolver)
        relationship_repo = await unit_env.get(RelationshipRepository)
        await resolver.resolve(BOB, ALICE, "dislike", "dislike")

        # Act
        resolution = await resolver.resolve(ALICE, BOB, "like", "like")

        # Assert
        assert resolution.status == EdgeStatus.PENDING
        assert relationship_repo.count() == 0

    @pytest.mark.asyncio
    async def test_like_does_not_answer_pending_ping(self, unit_env):
        """Liking back a pinger should leave the ping for explicit approval."""
        # Arrange
        resolver = await unit_env.get(MutualIntentResolver)
        edge_repo = await unit_env.get(EdgeRepository)
        relationship_repo = await unit_env.get(RelationshipRepository)
        message_repo = await unit_env.get(MessageRepository)
        await resolver.resolve(ALICE, BOB, "ping", "ping", message="coffee?")

        # Act
        resolution = await resolver.resolve(BOB, ALICE, "like", "like")

        # Assert
        assert resolution.status == EdgeStatus.PENDING
        assert resolution.relationship_id is None
        assert relationship_repo.count() == 0

        ping = await edge_repo.find(ALICE, BOB)
        assert ping.kind == InteractionKind.PING
        assert ping.status == EdgeStatus.PENDING
        assert ping.message == "coffee?"

        # The ping is still decided by approval, seeded with its text
        approved = await resolver.resolve(BOB, ALICE, "ping", "approve")
        assert approved.status == EdgeStatus.MATCH
        messages = await message_repo.find_by_relationship(approved.relationship_id)
        assert [m.content for m in messages] == ["coffee?"]
        assert messages[0].sender == ALICE

    @pytest.mark.asyncio
    async def test_like_replaces_own_pending_ping(self, unit_env):
        """A like after the sender's own ping should overwrite the ping."""
        # Arrange
        resolver = await unit_env.get(MutualIntentResolver)
        edge_repo = await unit_env.get(EdgeRepository)
        await resolver.resolve(ALICE, BOB, "ping", "ping", message="hi")

        # Act
        resolution = await resolver.resolve(ALICE, BOB, "like", "like")

        # Assert
        assert resolution.status == EdgeStatus.PENDING
        edge = await edge_repo.find(ALICE, BOB)
        assert edge.kind == InteractionKind.LIKE
        assert edge.message is None

        with pytest.raises(NotFoundError):
            await resolver.resolve(BOB, ALICE, "ping", "approve")

    @pytest.mark.asyncio
    async def test_like_after_own_ping_matches_counterpart_like(self, unit_env):
        """Once the ping is replaced, a like back should match normally."""
        # Arrange
        resolver = await unit_env.get(MutualIntentResolver)
        message_repo = await unit_env.get(MessageRepository)
        settings = await unit_env.get(MatchingSettings)
        await resolver.resolve(ALICE, BOB, "ping", "ping", message="hi")
        await resolver.resolve(ALICE, BOB, "like", "like")

        # Act
        resolution = await resolver.resolve(BOB, ALICE, "like", "like")

        # Assert
        assert resolution.status == EdgeStatus.MATCH
        messages = await message_repo.find_by_relationship(resolution.relationship_id)
        assert [m.content for m in messages] == [settings.match_seed_message]

    @pytest.mark.asyncio
    async def test_like_repairs_half_matched_pair(self, unit_env):
        """A like on a pair left half-matched should finish it with the same id."""
        # Arrange
        resolver = await unit_env.get(MutualIntentResolver)
        edge_repo = await unit_env.get(EdgeRepository)
        relationship_repo = await unit_env.get(RelationshipRepository)
        message_repo = await unit_env.get(MessageRepository)

        relationship_id = RelationshipId(uuid4())
        await edge_repo.transition(
            InteractionEdge(
                sender=ALICE,
                receiver=BOB,
                kind=InteractionKind.LIKE,
                status=EdgeStatus.MATCH,
                relationship_id=relationship_id,
            ),
            expected=None,
        )
        await edge_repo.transition(
            InteractionEdge(
                sender=BOB,
                receiver=ALICE,
                kind=InteractionKind.LIKE,
                status=EdgeStatus.PENDING,
            ),
            expected=None,
        )

        # Act
        resolution = await resolver.resolve(BOB, ALICE, "like", "like")

        # Assert
        assert resolution.status == EdgeStatus.MATCH
        assert resolution.relationship_id == relationship_id
        reverse = await edge_repo.find(BOB, ALICE)
        assert reverse.is_matched_to(relationship_id)
        assert await relationship_repo.find_by_id(relationship_id) is not None
        assert len(await message_repo.find_by_relationship(relationship_id)) == 1

    @pytest.mark.asyncio
    async def test_concurrent_likes_create_one_relationship(self, unit_env):
        """Two likes racing on the same pair should produce exactly one relationship."""
        # Arrange
        resolver = await unit_env.get(MutualIntentResolver)
        edge_repo = await unit_env.get(EdgeRepository)
        relationship_repo = await unit_env.get(RelationshipRepository)
        message_repo = await unit_env.get(MessageRepository)

        # Act
        results = await asyncio.gather(
            resolver.resolve(ALICE, BOB, "like", "like"),
            resolver.resolve(BOB, ALICE, "like", "like"),
        )

        # Assert
        forward = await edge_repo.find(ALICE, BOB)
        reverse = await edge_repo.find(BOB, ALICE)
        assert forward.status == EdgeStatus.MATCH
        assert reverse.status == EdgeStatus.MATCH
        assert forward.relationship_id == reverse.relationship_id
        assert relationship_repo.count() == 1

        claimed = {r.relationship_id for r in results if r.relationship_id}
        assert claimed == {forward.relationship_id}
        messages = await message_repo.find_by_relationship(forward.relationship_id)
        assert len(messages) == 1

    @pytest.mark.asyncio
    async def test_many_concurrent_likes_create_one_relationship(self, unit_env):
        """Repeated likes from both sides at once should still match exactly once."""
        # Arrange
        resolver = await unit_env.get(MutualIntentResolver)
        relationship_repo = await unit_env.get(RelationshipRepository)
        edge_repo = await unit_env.get(EdgeRepository)

        # Act
        await asyncio.gather(
            *(
                resolver.resolve(sender, receiver, "like", "like")
                for sender, receiver in [(ALICE, BOB), (BOB, ALICE)] * 3
            )
        )
        # Any request that gave up after losing races is settled by a retry
        await resolver.resolve(ALICE, BOB, "like", "like")

        # Assert
        forward = await edge_repo.find(ALICE, BOB)
        reverse = await edge_repo.find(BOB, ALICE)
        assert forward.status == EdgeStatus.MATCH
        assert forward.relationship_id == reverse.relationship_id
        assert relationship_repo.count() == 1


class TestDislike:
    """Tests for the dislike action."""

    @pytest.mark.asyncio
    async def test_dislike_twice_is_declined_without_relationship(self, unit_env):
        """Disliking twice should leave one declined edge and nothing else."""
        # Arrange
        resolver = await unit_env.get(MutualIntentResolver)
        edge_repo = await unit_env.get(EdgeRepository)
        relationship_repo = await unit_env.get(RelationshipRepository)

        # Act
        first = await resolver.resolve(ALICE, BOB, "dislike", "dislike")
        second = await resolver.resolve(ALICE, BOB, "dislike", "dislike")

        # Assert
        assert first.status == EdgeStatus.DECLINED
        assert second.status == EdgeStatus.DECLINED
        edge = await edge_repo.find(ALICE, BOB)
        assert edge.kind == InteractionKind.DISLIKE
        assert edge.relationship_id is None
        assert await edge_repo.find(BOB, ALICE) is None
        assert relationship_repo.count() == 0

    @pytest.mark.asyncio
    async def test_dislike_ignores_counterpart_like(self, unit_env):
        """A dislike should decline even when the other side already liked."""
        # Arrange
        resolver = await unit_env.get(MutualIntentResolver)
        edge_repo = await unit_env.get(EdgeRepository)
        await resolver.resolve(BOB, ALICE, "like", "like")

        # Act
        resolution = await resolver.resolve(ALICE, BOB, "dislike", "dislike")

        # Assert
        assert resolution.status == EdgeStatus.DECLINED
        reverse = await edge_repo.find(BOB, ALICE)
        assert reverse.status == EdgeStatus.PENDING

    @pytest.mark.asyncio
    async def test_dislike_after_ping_leaves_ping_approvable(self, unit_env):
        """Disliking a pinger should not touch the pending ping itself."""
        # Arrange
        resolver = await unit_env.get(MutualIntentResolver)
        edge_repo = await unit_env.get(EdgeRepository)
        await resolver.resolve(ALICE, BOB, "ping", "ping", message="hi")

        # Act
        resolution = await resolver.resolve(BOB, ALICE, "dislike", "dislike")

        # Assert
        assert resolution.status == EdgeStatus.DECLINED
        ping = await edge_repo.find(ALICE, BOB)
        assert ping.status == EdgeStatus.PENDING
        assert ping.message == "hi"

        approved = await resolver.resolve(BOB, ALICE, "ping", "approve")
        assert approved.status == EdgeStatus.MATCH


class TestPing:
    """Tests for ping, approve and reject actions."""

    @pytest.mark.asyncio
    async def test_ping_stores_message_verbatim(self, unit_env):
        """A ping should be pending with its message stored as given."""
        # Arrange
        resolver = await unit_env.get(MutualIntentResolver)
        edge_repo = await unit_env.get(EdgeRepository)

        # Act
        resolution = await resolver.resolve(ALICE, BOB, "ping", "ping", message="  hi 👋 ")

        # Assert
        assert resolution.status == EdgeStatus.PENDING
        edge = await edge_repo.find(ALICE, BOB)
        assert edge.kind == InteractionKind.PING
        assert edge.message == "  hi 👋 "

    @pytest.mark.asyncio
    async def test_ping_does_not_match_pending_like(self, unit_env):
        """A ping should not run the mutual check."""
        # Arrange
        resolver = await unit_env.get(MutualIntentResolver)
        relationship_repo = await unit_env.get(RelationshipRepository)
        await resolver.resolve(BOB, ALICE, "like", "like")

        # Act
        resolution = await resolver.resolve(ALICE, BOB, "ping", "ping", message="hey")

        # Assert
        assert resolution.status == EdgeStatus.PENDING
        assert relationship_repo.count() == 0

    @pytest.mark.asyncio
    async def test_ping_then_approve_seeds_relationship(self, unit_env):
        """Approving a ping should open a relationship seeded with its text."""
        # Arrange
        resolver = await unit_env.get(MutualIntentResolver)
        relationship_repo = await unit_env.get(RelationshipRepository)
        message_repo = await unit_env.get(MessageRepository)
        await resolver.resolve(ALICE, BOB, "ping", "ping", message="hi")

        # Act
        resolution = await resolver.resolve(BOB, ALICE, "ping", "approve")

        # Assert
        assert resolution.status == EdgeStatus.MATCH
        relationship = await relationship_repo.find_by_id(resolution.relationship_id)
        assert relationship.members == frozenset({ALICE, BOB})

        messages = await message_repo.find_by_relationship(resolution.relationship_id)
        assert len(messages) == 1
        assert messages[0].content == "hi"
        assert messages[0].sender == ALICE

    @pytest.mark.asyncio
    async def test_reject_then_approve_is_already_resolved(self, unit_env):
        """Rejecting a ping should decline both edges and make it final."""
        # Arrange
        resolver = await unit_env.get(MutualIntentResolver)
        edge_repo = await unit_env.get(EdgeRepository)
        await resolver.resolve(ALICE, BOB, "ping", "ping", message="hi")

        # Act
        resolution = await resolver.resolve(BOB, ALICE, "ping", "reject")

        # Assert
        assert resolution.status == EdgeStatus.DECLINED
        assert (await edge_repo.find(ALICE, BOB)).status == EdgeStatus.DECLINED
        assert (await edge_repo.find(BOB, ALICE)).status == EdgeStatus.DECLINED

        with pytest.raises(AlreadyResolvedError):
            await resolver.resolve(BOB, ALICE, "ping", "approve")


class TestValidation:
    """Tests for rejected input."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "kind,action",
        [
            ("like", "superlike"),
            ("wink", "like"),
            ("invite", "like"),
            ("invite", "approve"),
            ("like", "ping"),
            ("dislike", "like"),
        ],
    )
    async def test_unsupported_action(self, unit_env, kind, action):
        """Unknown actions, unknown kinds, invites and mismatches should be refused."""
        # Arrange
        resolver = await unit_env.get(MutualIntentResolver)
        edge_repo = await unit_env.get(EdgeRepository)

        # Act & Assert
        with pytest.raises(UnsupportedActionError):
            await resolver.resolve(ALICE, BOB, kind, action)
        assert await edge_repo.find(ALICE, BOB) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "sender,receiver",
        [("alice", "alice"), ("", "bob"), ("alice", "   ")],
    )
    async def test_invalid_users(self, unit_env, sender, receiver):
        """Self-interaction and blank handles should fail before any write."""
        # Arrange
        resolver = await unit_env.get(MutualIntentResolver)
        edge_repo = await unit_env.get(EdgeRepository)

        # Act & Assert
        with pytest.raises(ValidationError):
            await resolver.resolve(UserId(sender), UserId(receiver), "like", "like")
        assert await edge_repo.find_by_sender(UserId(sender)) == []

    @pytest.mark.asyncio
    async def test_message_ignored_for_like(self, unit_env):
        """A message sent with a like should not be stored."""
        # Arrange
        resolver = await unit_env.get(MutualIntentResolver)
        edge_repo = await unit_env.get(EdgeRepository)

        # Act
        await resolver.resolve(ALICE, BOB, "like", "like", message="ignored")

        # Assert
        edge = await edge_repo.find(ALICE, BOB)
        assert edge.message is None


class ContendedEdgeRepository(InMemoryEdgeRepository):
    """Edge store where every conditional write loses once contended."""

    def __init__(self) -> None:
        super().__init__()
        self.contended = False

    async def transition(self, edge, expected):
        if self.contended:
            raise ConflictError("InteractionEdge", edge.key)
        return await super().transition(edge, expected)


class TestExhaustedRetries:
    """Tests for requests that lose every attempt."""

    async def build_resolver(self, unit_env, edge_repo):
        return MutualIntentResolver(
            edge_repository=edge_repo,
            materializer=await unit_env.get(RelationshipMaterializer),
            ping_service=await unit_env.get(PingApprovalService),
            matching_settings=await unit_env.get(MatchingSettings),
        )

    @pytest.mark.asyncio
    async def test_like_falls_back_to_pending(self, unit_env):
        """A like that never wins a write should report pending, not an error."""
        # Arrange
        edge_repo = ContendedEdgeRepository()
        edge_repo.contended = True
        resolver = await self.build_resolver(unit_env, edge_repo)
        relationship_repo = await unit_env.get(RelationshipRepository)

        # Act
        resolution = await resolver.resolve(ALICE, BOB, "like", "like")

        # Assert
        assert resolution.status == EdgeStatus.PENDING
        assert resolution.relationship_id is None
        assert relationship_repo.count() == 0

    @pytest.mark.asyncio
    async def test_like_against_pending_like_falls_back_to_pending(self, unit_env):
        """Losing every write against a pending like should not open a relationship."""
        # Arrange
        edge_repo = ContendedEdgeRepository()
        resolver = await self.build_resolver(unit_env, edge_repo)
        relationship_repo = await unit_env.get(RelationshipRepository)
        await resolver.resolve(BOB, ALICE, "like", "like")
        edge_repo.contended = True

        # Act
        resolution = await resolver.resolve(ALICE, BOB, "like", "like")

        # Assert
        assert resolution.status == EdgeStatus.PENDING
        assert resolution.relationship_id is None
        assert relationship_repo.count() == 0
        assert (await edge_repo.find(BOB, ALICE)).status == EdgeStatus.PENDING
