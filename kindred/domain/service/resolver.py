"""Mutual-intent resolver.

Turns one user's intent toward another into edge transitions, and opens a
private relationship when both directions become compatible.

Every write is a conditional transition against the status last read, so
two requests racing on the same pair cannot both succeed. A mutual claim
always moves the two edges in canonical order (lower sender first), which
makes concurrent claimers contend on the same first record.
"""

from functools import partial
from uuid import uuid4

import logfire

from kindred.config import MatchingSettings
from kindred.domain.error import ConflictError, UnsupportedActionError
from kindred.domain.model import (
    Attempt,
    Conflict,
    InteractionEdge,
    Resolution,
    Resolved,
)
from kindred.domain.repository import EdgeRepository
from kindred.domain.value import (
    EdgeStatus,
    InteractionAction,
    InteractionKind,
    RelationshipId,
    RelationshipKind,
    UserId,
)

from .base import Service
from .materializer import RelationshipMaterializer
from .ping_service import PingApprovalService

# Kind recorded on the sender's edge for each intent action
_ACTION_KINDS = {
    InteractionAction.LIKE: InteractionKind.LIKE,
    InteractionAction.DISLIKE: InteractionKind.DISLIKE,
    InteractionAction.PING: InteractionKind.PING,
}


class MutualIntentResolver(Service):
    """Domain service resolving intents against the counterpart's edge."""

    def __init__(
        self,
        edge_repository: EdgeRepository,
        materializer: RelationshipMaterializer,
        ping_service: PingApprovalService,
        matching_settings: MatchingSettings,
    ) -> None:
        """Initialize resolver.

        Args:
            edge_repository: Interaction edge repository
            materializer: Relationship materializer
            ping_service: Ping approval workflow for approve/reject actions
            matching_settings: Seed texts and retry budget
        """
        self.edge_repository = edge_repository
        self.materializer = materializer
        self.ping_service = ping_service
        self.matching_settings = matching_settings

    @property
    def attempts(self) -> int:
        return 1 + self.matching_settings.conflict_retries

    async def resolve(
        self,
        sender: UserId,
        receiver: UserId,
        kind: str,
        action: str,
        message: str | None = None,
    ) -> Resolution:
        """Apply an intent from sender to receiver.

        Args:
            sender: User acting
            receiver: User the action is aimed at
            kind: Interaction kind (like, dislike, ping)
            action: Action (like, dislike, ping, approve, reject)
            message: Ping text, ignored for other actions

        Returns:
            Status of the sender's edge and the relationship id, if any

        Raises:
            ValidationError: If a handle is blank or sender equals receiver
            UnsupportedActionError: For unknown actions or kinds, and for invites
            NotFoundError: When approving or rejecting a ping that does not exist
            AlreadyResolvedError: When approving or rejecting a resolved ping
            StoreUnavailableError: If the store fails or times out
        """
        self._require_distinct(sender=sender, receiver=receiver)
        parsed_action = self._parse_action(action)
        self._check_kind(kind, parsed_action)

        with logfire.span(
            "resolver.resolve",
            sender=sender,
            receiver=receiver,
            action=parsed_action.value,
        ):
            # Approve and reject come from the ping's receiver
            if parsed_action == InteractionAction.APPROVE:
                return await self.ping_service.approve(pinger=receiver, approver=sender)
            if parsed_action == InteractionAction.REJECT:
                return await self.ping_service.decline(pinger=receiver, approver=sender)

            attempt = {
                InteractionAction.LIKE: partial(self._attempt_like, sender, receiver),
                InteractionAction.DISLIKE: partial(
                    self._attempt_dislike, sender, receiver
                ),
                InteractionAction.PING: partial(
                    self._attempt_ping, sender, receiver, message
                ),
            }[parsed_action]

            resolution = await self._run_attempts(
                attempt,
                self.attempts,
                f"resolver.{parsed_action.value}",
                sender=sender,
                receiver=receiver,
            )
            if resolution is None:
                resolution = await self._fall_back(sender, receiver, parsed_action)

            logfire.info(
                "Intent resolved",
                sender=sender,
                receiver=receiver,
                action=parsed_action.value,
                status=resolution.status.value,
                relationship_id=str(resolution.relationship_id),
                created=resolution.created,
            )
            return resolution

    @staticmethod
    def _parse_action(action: str) -> InteractionAction:
        try:
            return InteractionAction(action)
        except ValueError:
            raise UnsupportedActionError(action) from None

    @staticmethod
    def _check_kind(kind: str, action: InteractionAction) -> None:
        try:
            parsed = InteractionKind(kind)
        except ValueError:
            raise UnsupportedActionError(kind) from None
        # Invite edges belong to the group workflow
        if parsed == InteractionKind.INVITE:
            raise UnsupportedActionError(kind)
        expected = _ACTION_KINDS.get(action)
        if expected is not None and parsed != expected:
            raise UnsupportedActionError(f"{action.value} with kind {kind}")

    # ------------------------------------------------------------------ like

    async def _attempt_like(self, sender: UserId, receiver: UserId) -> Attempt:
        mine = await self.edge_repository.find(sender, receiver)
        theirs = await self.edge_repository.find(receiver, sender)

        if any(e is not None and e.status == EdgeStatus.MATCH for e in (mine, theirs)):
            claimed = self._claimed_relationship(mine, theirs)
            return await self._complete_pair(sender, receiver, mine, theirs, claimed)

        # A pending ping from the sender is replaced by the like
        if not self._is_pending_like(mine):
            try:
                mine = await self.edge_repository.transition(
                    self._intent(
                        mine, sender, receiver, InteractionKind.LIKE, EdgeStatus.PENDING
                    ),
                    expected=mine.status if mine else None,
                )
            except ConflictError as e:
                return Conflict(reason=str(e))

        # Only a pending like is answered here; pings wait for approve or reject
        if not self._is_pending_like(theirs):
            # Their like may have landed between our read and our write
            theirs = await self.edge_repository.find(receiver, sender)
            if theirs is not None and theirs.status == EdgeStatus.MATCH:
                return Conflict(reason=f"{theirs.key} matched concurrently")
            if not self._is_pending_like(theirs):
                return Resolved(resolution=Resolution(status=mine.status))

        return await self._claim_pair(sender, receiver, mine, theirs)

    @staticmethod
    def _claimed_relationship(
        mine: InteractionEdge | None, theirs: InteractionEdge | None
    ) -> RelationshipId | None:
        """Relationship id already claimed on either edge of the pair."""
        for edge in (mine, theirs):
            if edge is not None and edge.status == EdgeStatus.MATCH:
                if edge.relationship_id is not None:
                    return edge.relationship_id
        return None

    async def _claim_pair(
        self,
        sender: UserId,
        receiver: UserId,
        mine: InteractionEdge,
        theirs: InteractionEdge,
    ) -> Attempt:
        relationship_id = RelationshipId(uuid4())
        first, second = sorted((mine, theirs), key=lambda e: e.sender)

        try:
            first = await self.edge_repository.transition(
                first.advance(status=EdgeStatus.MATCH, relationship_id=relationship_id),
                expected=EdgeStatus.PENDING,
            )
        except ConflictError as e:
            return Conflict(reason=str(e))

        try:
            await self.edge_repository.transition(
                second.advance(status=EdgeStatus.MATCH, relationship_id=relationship_id),
                expected=EdgeStatus.PENDING,
            )
        except ConflictError as e:
            # Another request may have completed our claim for us
            current = await self.edge_repository.find(second.sender, second.receiver)
            if current is None or not current.is_matched_to(relationship_id):
                await self._release(first, relationship_id)
                return Conflict(reason=str(e))

        return await self._open(sender, receiver, relationship_id, None)

    async def _release(
        self, edge: InteractionEdge, relationship_id: RelationshipId
    ) -> None:
        """Return a claimed edge to pending after the claim could not finish."""
        try:
            await self.edge_repository.transition(
                edge.advance(status=EdgeStatus.PENDING, relationship_id=None),
                expected=EdgeStatus.MATCH,
            )
            logfire.warn(
                "Mutual claim released",
                edge=edge.key,
                relationship_id=str(relationship_id),
            )
        except ConflictError:
            logfire.warn(
                "Mutual claim release lost",
                edge=edge.key,
                relationship_id=str(relationship_id),
            )

    async def _complete_pair(
        self,
        sender: UserId,
        receiver: UserId,
        mine: InteractionEdge | None,
        theirs: InteractionEdge | None,
        relationship_id: RelationshipId | None,
    ) -> Attempt:
        """Finish a pair where at least one edge is already matched."""
        if relationship_id is None:
            return Conflict(reason=f"{sender}->{receiver} matched without an id")

        if mine is None or not mine.is_matched_to(relationship_id):
            try:
                mine = await self.edge_repository.transition(
                    self._intent(
                        mine,
                        sender,
                        receiver,
                        InteractionKind.LIKE,
                        EdgeStatus.MATCH,
                        relationship_id,
                    ),
                    expected=mine.status if mine else None,
                )
            except ConflictError as e:
                return Conflict(reason=str(e))

        # A counterpart who declined after matching stays declined
        if theirs is None or theirs.status == EdgeStatus.PENDING:
            try:
                theirs = await self.edge_repository.transition(
                    self._intent(
                        theirs,
                        receiver,
                        sender,
                        mine.kind,
                        EdgeStatus.MATCH,
                        relationship_id,
                    ),
                    expected=theirs.status if theirs else None,
                )
            except ConflictError as e:
                return Conflict(reason=str(e))

        if theirs is not None and theirs.is_matched_to(relationship_id):
            return await self._open(
                sender, receiver, relationship_id, self._pending_ping(theirs, mine)
            )

        return Resolved(
            resolution=Resolution(
                status=EdgeStatus.MATCH, relationship_id=relationship_id
            )
        )

    async def _open(
        self,
        sender: UserId,
        receiver: UserId,
        relationship_id: RelationshipId,
        ping: InteractionEdge | None,
    ) -> Attempt:
        """Materialize the matched pair, seeding with a ping text when present."""
        if ping is not None:
            seed_content = ping.message or self.matching_settings.ping_fallback_message
            seed_author = ping.sender
        else:
            seed_content = self.matching_settings.match_seed_message
            seed_author = sender

        _, created = await self.materializer.materialize(
            members={sender, receiver},
            kind=RelationshipKind.PRIVATE,
            seed_content=seed_content,
            seed_author=seed_author,
            relationship_id=relationship_id,
        )
        return Resolved(
            resolution=Resolution(
                status=EdgeStatus.MATCH,
                relationship_id=relationship_id,
                created=created,
            )
        )

    # ---------------------------------------------------------- dislike/ping

    async def _attempt_dislike(self, sender: UserId, receiver: UserId) -> Attempt:
        mine = await self.edge_repository.find(sender, receiver)
        if mine is not None and mine.status.is_terminal_refusal:
            return Resolved(resolution=Resolution(status=EdgeStatus.DECLINED))

        try:
            mine = await self.edge_repository.transition(
                self._intent(
                    mine, sender, receiver, InteractionKind.DISLIKE, EdgeStatus.DECLINED
                ),
                expected=mine.status if mine else None,
            )
        except ConflictError as e:
            return Conflict(reason=str(e))
        return Resolved(resolution=Resolution(status=mine.status))

    async def _attempt_ping(
        self, sender: UserId, receiver: UserId, message: str | None
    ) -> Attempt:
        mine = await self.edge_repository.find(sender, receiver)
        if mine is not None and mine.status == EdgeStatus.MATCH:
            return Resolved(
                resolution=Resolution(
                    status=mine.status, relationship_id=mine.relationship_id
                )
            )

        try:
            mine = await self.edge_repository.transition(
                self._intent(
                    mine,
                    sender,
                    receiver,
                    InteractionKind.PING,
                    EdgeStatus.PENDING,
                    message=message,
                ),
                expected=mine.status if mine else None,
            )
        except ConflictError as e:
            return Conflict(reason=str(e))
        return Resolved(resolution=Resolution(status=mine.status))

    # --------------------------------------------------------------- helpers

    @staticmethod
    def _is_pending_like(edge: InteractionEdge | None) -> bool:
        return (
            edge is not None
            and edge.status == EdgeStatus.PENDING
            and edge.kind == InteractionKind.LIKE
        )

    @staticmethod
    def _pending_ping(*edges: InteractionEdge) -> InteractionEdge | None:
        """First edge of the pair that carried a ping, used to seed the chat."""
        return next((e for e in edges if e.kind == InteractionKind.PING), None)

    @staticmethod
    def _intent(
        current: InteractionEdge | None,
        sender: UserId,
        receiver: UserId,
        kind: InteractionKind,
        status: EdgeStatus,
        relationship_id: RelationshipId | None = None,
        message: str | None = None,
    ) -> InteractionEdge:
        """Next state of an edge, created when absent.

        A match keeps the kind of intent that produced it.
        """
        if current is None:
            return InteractionEdge(
                sender=sender,
                receiver=receiver,
                kind=kind,
                status=status,
                message=message,
                relationship_id=relationship_id,
            )
        changes = {"status": status, "relationship_id": relationship_id}
        if status != EdgeStatus.MATCH:
            changes["kind"] = kind
            changes["message"] = message if kind == InteractionKind.PING else None
        return current.advance(**changes)

    async def _fall_back(
        self, sender: UserId, receiver: UserId, action: InteractionAction
    ) -> Resolution:
        """Report the sender's edge after every attempt lost a race."""
        mine = await self.edge_repository.find(sender, receiver)
        if mine is None and action == InteractionAction.LIKE:
            try:
                mine = await self.edge_repository.transition(
                    self._intent(
                        None, sender, receiver, InteractionKind.LIKE, EdgeStatus.PENDING
                    ),
                    expected=None,
                )
            except ConflictError:
                mine = await self.edge_repository.find(sender, receiver)

        logfire.warn(
            "Falling back to stored edge",
            sender=sender,
            receiver=receiver,
            status=mine.status.value if mine else None,
        )
        if mine is None:
            return Resolution(status=EdgeStatus.PENDING)
        return Resolution(status=mine.status, relationship_id=mine.relationship_id)
