"""Group invite repository interface."""

from abc import ABC, abstractmethod

from kindred.domain.model.invite import GroupInvite
from kindred.domain.value import InviteRecordType, InviteStatus, UserId


class GroupInviteRepository(ABC):
    """Repository for group invite proposals and group membership records.

    Records are keyed by (subject, record_key).
    """

    @abstractmethod
    async def find(self, subject: UserId, record_key: str) -> GroupInvite | None:
        """Find a record by its primary key.

        Args:
            subject: Partition owner of the record
            record_key: Record key within the partition

        Returns:
            The record if found, None otherwise
        """
        pass

    @abstractmethod
    async def transition(
        self, record: GroupInvite, expected: InviteStatus | None
    ) -> GroupInvite:
        """Write a record only if the stored one is still in the expected status.

        Args:
            record: Record state to store
            expected: Last observed status, None when the record was absent

        Returns:
            The stored record

        Raises:
            ConflictError: If the stored status no longer matches ``expected``
            StoreUnavailableError: If the store fails or times out
        """
        pass

    @abstractmethod
    async def find_by_subject(
        self,
        subject: UserId,
        record_type: InviteRecordType,
        status: InviteStatus | None = None,
    ) -> list[GroupInvite]:
        """List records owned by a user, newest first.

        Args:
            subject: Partition owner
            record_type: Proposal or group records
            status: Optional status filter

        Returns:
            List of records
        """
        pass

    @abstractmethod
    async def find_by_approver(
        self, approver: UserId, status: InviteStatus | None = None
    ) -> list[GroupInvite]:
        """List proposals awaiting (or once awaiting) an approver, oldest first.

        Args:
            approver: Approving user
            status: Optional status filter

        Returns:
            List of proposals
        """
        pass
