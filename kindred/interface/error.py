"""Interface layer errors.

Maps domain errors onto HTTP responses.
"""

from fastapi import HTTPException, status

from kindred.domain.error import (
    AlreadyResolvedError,
    ConflictError,
    DomainError,
    InvalidInviteeError,
    NotFoundError,
    StoreUnavailableError,
    UnsupportedActionError,
    ValidationError,
)

_STATUS_CODES: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (UnsupportedActionError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidInviteeError, status.HTTP_404_NOT_FOUND),
    (AlreadyResolvedError, status.HTTP_409_CONFLICT),
    # Only reaches callers if retries were exhausted inside a repair path
    (ConflictError, status.HTTP_409_CONFLICT),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def to_http_exception(error: DomainError) -> HTTPException:
    """Translate a domain error into an HTTPException.

    Args:
        error: Error raised by a use case

    Returns:
        HTTPException with the matching status code and the error message
    """
    for error_type, status_code in _STATUS_CODES:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error)
    )
