"""Custom exception classes for the site admin backend."""

from fastapi import HTTPException, status


class ErrorCode:
    """Business error codes returned in the ``code`` field of error bodies."""

    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    VALIDATION_ERROR = 422
    SERVER_ERROR = 500


class SiteAdminError(Exception):
    """Base exception for the site admin backend."""

    code: int = ErrorCode.BAD_REQUEST

    def __init__(self, message: str = "An error occurred", code: int | None = None):
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(self.message)


class AuthenticationError(SiteAdminError):
    """Raised when authentication fails."""
    code = ErrorCode.UNAUTHORIZED


class AuthorizationError(SiteAdminError):
    """Raised when user lacks permission."""
    code = ErrorCode.FORBIDDEN


class ResourceNotFoundError(SiteAdminError):
    """Raised when a requested resource is not found."""
    code = ErrorCode.NOT_FOUND


class ValidationError(SiteAdminError):
    """Raised when input validation fails."""
    code = ErrorCode.VALIDATION_ERROR


# HTTP exception shortcuts
def unauthorized(detail: str = "Not authenticated") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )
