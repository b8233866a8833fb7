"""Translate service errors into HTTP responses."""
from fastapi import HTTPException

from careerpage.exceptions import (
    AuthFailure,
    CareerPageError,
    ConflictError,
    NotFoundError,
    RemoteUnavailableError,
    ValidationFailure,
)

STATUS_CODES = {
    NotFoundError: 404,
    ConflictError: 409,
    ValidationFailure: 422,
    RemoteUnavailableError: 503,
}


def status_for(error: CareerPageError) -> int:
    if isinstance(error, AuthFailure):
        if error.reason in (AuthFailure.ACCOUNT_LOCKED, AuthFailure.FORBIDDEN):
            return 403
        return 401
    for error_type, status_code in STATUS_CODES.items():
        if isinstance(error, error_type):
            return status_code
    return 500


def to_http_exception(error: CareerPageError) -> HTTPException:
    if isinstance(error, AuthFailure):
        # Clients branch on the reason (e.g. show "confirm your email")
        return HTTPException(
            status_code=status_for(error),
            detail={"message": str(error), "reason": error.reason},
        )
    return HTTPException(status_code=status_for(error), detail=str(error))
