"""Domain errors that carry a machine-readable code and an HTTP status."""

from fastapi import status


class DomainError(Exception):
    """Expected failure that the API boundary reports to the caller as-is."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, code: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code


class ForbiddenError(DomainError):
    """The caller may not touch this resource."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "LIST_FORBIDDEN"


class AuthenticationRequiredError(DomainError):
    """The operation needs an authenticated caller."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "AUTH_REQUIRED"


class ConflictError(DomainError):
    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"
