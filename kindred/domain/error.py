"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class InvalidInviteeError(DomainError):
    """Raised when a group invite names a user with no profile."""

    def __init__(self, invitee: str):
        self.invitee = invitee
        super().__init__(f"Invalid invitee handle: {invitee}")


class UnsupportedActionError(DomainError):
    """Raised for actions or kinds the resolver does not accept."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Unsupported action: {action}")


class AlreadyResolvedError(DomainError):
    """Raised when approving or declining a proposal that is no longer pending."""

    def __init__(self, resource: str, identifier: str, status: str):
        self.resource = resource
        self.identifier = identifier
        self.status = status
        super().__init__(f"{resource} {identifier} is already {status}")


class ConflictError(DomainError):
    """Raised when a conditional write loses to a concurrent writer.

    Consumed by the resolver and the approval workflows; never returned to
    API callers.
    """

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"Concurrent update on {resource} {identifier}")


class StoreUnavailableError(DomainError):
    """Raised when the backing store fails or times out."""

    def __init__(self, operation: str, reason: str = ""):
        self.operation = operation
        self.reason = reason
        message = f"Store unavailable during {operation}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
