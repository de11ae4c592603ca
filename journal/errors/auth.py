"""Authentication and authorization errors."""

from starlette.status import (
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from journal.errors.base import BaseAppError, create_exception_handler
from journal.monitoring import get_logger

logger = get_logger(__name__)


class UnauthenticatedError(BaseAppError):
    """Raised when a request carries no valid session."""

    def __init__(self, detail: str = "Not authenticated") -> None:
        super().__init__(
            detail,
            HTTP_401_UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidCredentialsError(UnauthenticatedError):
    """Raised when email or password is wrong."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class ForbiddenError(BaseAppError):
    """Raised when the user is signed in but not allowed to do this."""

    def __init__(self, detail: str = "You do not have permission to perform this action") -> None:
        super().__init__(detail, HTTP_403_FORBIDDEN)


class RegistrationClosedError(ForbiddenError):
    """Raised when sign-ups are disabled in site settings."""

    def __init__(self) -> None:
        super().__init__("Registration is currently disabled")


class PasswordHashingError(BaseAppError):
    """Raised when the password backend fails to hash."""

    def __init__(self, detail: str = "Failed to hash password") -> None:
        super().__init__(detail, HTTP_500_INTERNAL_SERVER_ERROR)


auth_exception_handler = create_exception_handler(logger)
