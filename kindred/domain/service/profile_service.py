"""Profile directory domain service."""

import logfire

from kindred.domain.repository import ProfileRepository
from kindred.domain.value import ProfileSummary, UserId

from .base import Service


class ProfileService(Service):
    """Domain service for reading the profile directory."""

    def __init__(self, profile_repository: ProfileRepository) -> None:
        """Initialize profile service.

        Args:
            profile_repository: Profile repository
        """
        self.profile_repository = profile_repository

    async def exists(self, handle: UserId) -> bool:
        """Check whether a user has a profile.

        Args:
            handle: User handle

        Returns:
            True if the profile exists
        """
        with logfire.span("profile_service.exists", handle=handle):
            profile = await self.profile_repository.find(handle)
            if profile is None:
                logfire.warn("Profile not found", handle=handle)
            return profile is not None

    async def get_summaries(
        self, handles: list[UserId]
    ) -> dict[UserId, ProfileSummary]:
        """Fetch summaries for a batch of users.

        Args:
            handles: User handles, duplicates allowed

        Returns:
            Mapping of handle to summary for the users that exist
        """
        unique = list(dict.fromkeys(handles))
        if not unique:
            return {}

        with logfire.span("profile_service.get_summaries", count=len(unique)):
            profiles = await self.profile_repository.find_many(unique)
            summaries = {p.handle: p for p in profiles}
            missing = len(unique) - len(summaries)
            if missing:
                logfire.warn("Profiles missing from directory", missing=missing)
            return summaries
