"""In-memory profile directory for testing."""

from kindred.domain.repository.profile import ProfileRepository
from kindred.domain.value import ProfileSummary, UserId


class InMemoryProfileRepository(ProfileRepository):
    """In-memory implementation of ProfileRepository for testing."""

    def __init__(self) -> None:
        self._profiles: dict[UserId, ProfileSummary] = {}

    async def find(self, handle: UserId) -> ProfileSummary | None:
        """Find a profile summary by handle."""
        return self._profiles.get(handle)

    async def find_many(self, handles: list[UserId]) -> list[ProfileSummary]:
        """Find summaries for the known handles."""
        return [self._profiles[h] for h in handles if h in self._profiles]

    async def save(self, profile: ProfileSummary) -> ProfileSummary:
        """Create or replace a profile summary."""
        self._profiles[profile.handle] = profile
        return profile
