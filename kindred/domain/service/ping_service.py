"""Ping approval domain service."""

from functools import partial
from uuid import uuid4

import logfire

from kindred.config import MatchingSettings
from kindred.domain.error import AlreadyResolvedError, ConflictError, NotFoundError
from kindred.domain.model import (
    Attempt,
    Conflict,
    Failed,
    InteractionEdge,
    Resolution,
    Resolved,
)
from kindred.domain.repository import EdgeRepository
from kindred.domain.value import (
    EdgeStatus,
    InteractionKind,
    RelationshipId,
    RelationshipKind,
    UserId,
)

from .base import Service
from .materializer import RelationshipMaterializer


class PingApprovalService(Service):
    """Domain service for the two-step ping workflow.

    A ping is a pending edge of kind ``ping`` from the pinger to the
    approver. Approving moves both directions to ``match`` and opens a
    private relationship seeded with the ping text; declining moves both
    directions to ``declined``. Both outcomes are final.
    """

    def __init__(
        self,
        edge_repository: EdgeRepository,
        materializer: RelationshipMaterializer,
        matching_settings: MatchingSettings,
    ) -> None:
        """Initialize ping approval service.

        Args:
            edge_repository: Interaction edge repository
            materializer: Relationship materializer
            matching_settings: Seed texts and retry budget
        """
        self.edge_repository = edge_repository
        self.materializer = materializer
        self.matching_settings = matching_settings

    @property
    def attempts(self) -> int:
        return 1 + self.matching_settings.conflict_retries

    async def approve(self, pinger: UserId, approver: UserId) -> Resolution:
        """Accept a pending ping.

        Args:
            pinger: User who sent the ping
            approver: User the ping was sent to

        Returns:
            Match resolution with the shared relationship id

        Raises:
            ValidationError: If the handles are blank or equal
            NotFoundError: If there is no ping from pinger to approver
            AlreadyResolvedError: If the ping was already approved or declined
        """
        self._require_distinct(pinger=pinger, approver=approver)

        with logfire.span("ping_service.approve", pinger=pinger, approver=approver):
            resolution = await self._run_attempts(
                partial(self._attempt_approve, pinger, approver),
                self.attempts,
                "ping.approve",
                pinger=pinger,
                approver=approver,
            )
            if resolution is None:
                resolution = await self._current(pinger, approver)
            logfire.info(
                "Ping approved",
                pinger=pinger,
                approver=approver,
                status=resolution.status.value,
                relationship_id=str(resolution.relationship_id),
            )
            return resolution

    async def decline(self, pinger: UserId, approver: UserId) -> Resolution:
        """Refuse a pending ping.

        Args:
            pinger: User who sent the ping
            approver: User the ping was sent to

        Returns:
            Declined resolution

        Raises:
            ValidationError: If the handles are blank or equal
            NotFoundError: If there is no ping from pinger to approver
            AlreadyResolvedError: If the ping was already approved or declined
        """
        self._require_distinct(pinger=pinger, approver=approver)

        with logfire.span("ping_service.decline", pinger=pinger, approver=approver):
            resolution = await self._run_attempts(
                partial(self._attempt_decline, pinger, approver),
                self.attempts,
                "ping.decline",
                pinger=pinger,
                approver=approver,
            )
            if resolution is None:
                resolution = await self._current(pinger, approver)
            logfire.info("Ping declined", pinger=pinger, approver=approver)
            return resolution

    async def _attempt_approve(self, pinger: UserId, approver: UserId) -> Attempt:
        ping = await self.edge_repository.find(pinger, approver)
        if ping is None or ping.kind != InteractionKind.PING:
            return Failed(error=NotFoundError("Ping", f"{pinger}->{approver}"))

        reverse = await self.edge_repository.find(approver, pinger)

        if ping.status == EdgeStatus.MATCH and ping.relationship_id is not None:
            if reverse is not None and reverse.is_matched_to(ping.relationship_id):
                return Failed(
                    error=AlreadyResolvedError("Ping", ping.key, ping.status.value)
                )
            # An earlier approval stopped after claiming the ping
            logfire.warn("Repairing half-approved ping", ping=ping.key)
            return await self._complete_approval(ping, reverse, ping.relationship_id)

        if ping.status != EdgeStatus.PENDING:
            return Failed(
                error=AlreadyResolvedError("Ping", ping.key, ping.status.value)
            )

        relationship_id = RelationshipId(uuid4())
        try:
            ping = await self.edge_repository.transition(
                ping.advance(status=EdgeStatus.MATCH, relationship_id=relationship_id),
                expected=EdgeStatus.PENDING,
            )
        except ConflictError as e:
            return Conflict(reason=str(e))

        return await self._complete_approval(ping, reverse, relationship_id)

    async def _complete_approval(
        self,
        ping: InteractionEdge,
        reverse: InteractionEdge | None,
        relationship_id: RelationshipId,
    ) -> Attempt:
        await self._mirror(
            ping,
            reverse,
            status=EdgeStatus.MATCH,
            relationship_id=relationship_id,
        )
        _, created = await self.materializer.materialize(
            members={ping.sender, ping.receiver},
            kind=RelationshipKind.PRIVATE,
            seed_content=ping.message or self.matching_settings.ping_fallback_message,
            seed_author=ping.sender,
            relationship_id=relationship_id,
        )
        return Resolved(
            resolution=Resolution(
                status=EdgeStatus.MATCH,
                relationship_id=relationship_id,
                created=created,
            )
        )

    async def _attempt_decline(self, pinger: UserId, approver: UserId) -> Attempt:
        ping = await self.edge_repository.find(pinger, approver)
        if ping is None or ping.kind != InteractionKind.PING:
            return Failed(error=NotFoundError("Ping", f"{pinger}->{approver}"))
        if ping.status != EdgeStatus.PENDING:
            return Failed(
                error=AlreadyResolvedError("Ping", ping.key, ping.status.value)
            )

        try:
            ping = await self.edge_repository.transition(
                ping.advance(status=EdgeStatus.DECLINED),
                expected=EdgeStatus.PENDING,
            )
        except ConflictError as e:
            return Conflict(reason=str(e))

        reverse = await self.edge_repository.find(approver, pinger)
        await self._mirror(ping, reverse, status=EdgeStatus.DECLINED)
        return Resolved(resolution=Resolution(status=EdgeStatus.DECLINED))

    async def _mirror(
        self,
        ping: InteractionEdge,
        reverse: InteractionEdge | None,
        status: EdgeStatus,
        relationship_id: RelationshipId | None = None,
    ) -> InteractionEdge | None:
        """Bring the approver's own edge in line with the resolved ping.

        A lost write here is not fatal: the ping already carries the
        outcome, and approving again completes the reverse edge.
        """
        for _ in range(self.attempts):
            if reverse is not None and reverse.status == status and (
                relationship_id is None or reverse.relationship_id == relationship_id
            ):
                return reverse

            if reverse is None:
                target = InteractionEdge(
                    sender=ping.receiver,
                    receiver=ping.sender,
                    kind=InteractionKind.PING,
                    status=status,
                    relationship_id=relationship_id,
                )
            else:
                target = reverse.advance(
                    status=status,
                    relationship_id=relationship_id or reverse.relationship_id,
                )

            try:
                return await self.edge_repository.transition(
                    target, expected=reverse.status if reverse else None
                )
            except ConflictError:
                reverse = await self.edge_repository.find(ping.receiver, ping.sender)

        logfire.warn(
            "Reverse edge not updated",
            ping=ping.key,
            status=status.value,
        )
        return reverse

    async def _current(self, pinger: UserId, approver: UserId) -> Resolution:
        ping = await self.edge_repository.find(pinger, approver)
        if ping is None:
            raise NotFoundError("Ping", f"{pinger}->{approver}")
        return Resolution(status=ping.status, relationship_id=ping.relationship_id)
