"""Profile directory interface."""

from abc import ABC, abstractmethod

from kindred.domain.value import ProfileSummary, UserId


class ProfileRepository(ABC):
    """Read access to the profile directory owned by the profile service."""

    @abstractmethod
    async def find(self, handle: UserId) -> ProfileSummary | None:
        """Find a profile summary by handle.

        Args:
            handle: User handle

        Returns:
            The summary if the user exists, None otherwise
        """
        pass

    @abstractmethod
    async def find_many(self, handles: list[UserId]) -> list[ProfileSummary]:
        """Find summaries for several handles in one call.

        Unknown handles are left out of the result.

        Args:
            handles: User handles

        Returns:
            List of summaries
        """
        pass

    @abstractmethod
    async def save(self, profile: ProfileSummary) -> ProfileSummary:
        """Create or replace a profile summary.

        Args:
            profile: The summary to store

        Returns:
            The stored summary
        """
        pass
