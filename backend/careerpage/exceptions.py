"""
Domain errors raised by the services layer.

API endpoints translate these into HTTP responses; services never raise
HTTPException themselves.
"""


class CareerPageError(Exception):
    """Base class for all service-level errors."""
    pass


class NotFoundError(CareerPageError):
    """Requested company, job or section does not exist."""
    pass


class RemoteUnavailableError(CareerPageError):
    """The database is unreachable or not configured."""
    pass


class ConflictError(CareerPageError):
    """A uniqueness rule (company slug, job slug, email) was violated."""
    pass


class ValidationFailure(CareerPageError):
    """Input rejected before any store call was attempted."""
    pass


class DuplicateSectionError(ValidationFailure):
    """A page may only carry one Jobs section."""
    pass


class AuthFailure(CareerPageError):
    """Sign-in, session lookup or an ownership check failed."""

    INVALID_CREDENTIALS = "invalid_credentials"
    EMAIL_NOT_CONFIRMED = "email_not_confirmed"
    ACCOUNT_LOCKED = "account_locked"
    NOT_AUTHENTICATED = "not_authenticated"
    FORBIDDEN = "forbidden"

    def __init__(self, message: str, reason: str = INVALID_CREDENTIALS):
        super().__init__(message)
        self.reason = reason
