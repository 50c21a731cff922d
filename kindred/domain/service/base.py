"""Base service class for domain services."""

from collections.abc import Awaitable, Callable

import logfire

from kindred.domain.error import ValidationError
from kindred.domain.model import Attempt, Conflict, Failed, Resolution, Resolved
from kindred.domain.value import UserId


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.
    """

    @staticmethod
    def _require_distinct(**users: UserId) -> None:
        """Reject blank handles and users that appear in two roles.

        Raises:
            ValidationError: If a handle is blank or two roles share a user
        """
        for role, user in users.items():
            if not user or not str(user).strip():
                raise ValidationError(f"{role} must not be empty")
        if len(set(users.values())) != len(users):
            raise ValidationError(f"{', '.join(users)} must be different users")

    @staticmethod
    async def _run_attempts(
        attempt: Callable[[], Awaitable[Attempt]],
        attempts: int,
        operation: str,
        **context: str,
    ) -> Resolution | None:
        """Run an attempt until it resolves, fails, or runs out of tries.

        Args:
            attempt: Coroutine factory producing one tagged attempt
            attempts: Total number of tries
            operation: Name used in log events
            context: Extra log attributes

        Returns:
            The resolution, or None when every try ended in a conflict

        Raises:
            DomainError: The error carried by a Failed attempt
        """
        for number in range(1, attempts + 1):
            outcome = await attempt()
            if isinstance(outcome, Resolved):
                return outcome.resolution
            if isinstance(outcome, Failed):
                raise outcome.error
            if isinstance(outcome, Conflict):
                logfire.warn(
                    "Conditional write lost",
                    operation=operation,
                    attempt=number,
                    reason=outcome.reason,
                    **context,
                )
        return None
