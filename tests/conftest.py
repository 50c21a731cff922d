"""Test configuration and fixtures."""

import logfire

from kindred.domain.repository import ProfileRepository
from kindred.domain.value import ProfileSummary, UserId

# Keep telemetry local during tests
logfire.configure(send_to_logfire=False, console=False)


async def add_profiles(
    profile_repository: ProfileRepository, *handles: str
) -> list[ProfileSummary]:
    """Helper to register users in the profile directory.

    Display names are derived from the handle, e.g. "alice" -> "Alice".

    Args:
        profile_repository: Profile repository to write to
        handles: User handles

    Returns:
        Saved profile summaries
    """
    return [
        await profile_repository.save(
            ProfileSummary(
                handle=UserId(handle),
                name=handle.capitalize(),
                photo_url=f"https://photos.example.com/{handle}/1.jpg",
            )
        )
        for handle in handles
    ]
