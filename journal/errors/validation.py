"""Custom validation error handling for FastAPI."""

from typing import cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_422_UNPROCESSABLE_CONTENT

from journal.errors.base import BaseAppError, create_exception_handler
from journal.monitoring import get_logger
from journal.utils.helpers import host

logger = get_logger(__name__)


class ValidationError(BaseAppError):
    """A request that is well-formed but breaks a business rule."""

    def __init__(
        self,
        detail: str = "Validation Error",
        errors: list[dict] | None = None,
        status_code: int = HTTP_400_BAD_REQUEST,
    ) -> None:
        super().__init__(detail=detail, status_code=status_code)
        self.errors = errors or []


class SelfRoleChangeError(ValidationError):
    """Raised when an admin tries to change their own role."""

    def __init__(self) -> None:
        super().__init__("You cannot change your own role")


app_validation_exception_handler = create_exception_handler(logger)


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle Pydantic validation errors with cleaner response format.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse with formatted validation errors.
    """
    exec_error = cast(RequestValidationError, exc)

    formatted_errors = []
    for error in exec_error.errors():
        formatted_error = {
            # Skip the leading "body"/"query" location segment.
            "field": ".".join(str(loc) for loc in error.get("loc", [])[1:]),
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type", "validation_error"),
        }
        if "ctx" in error:
            formatted_error["context"] = {
                key: str(value) if isinstance(value, Exception) else value
                for key, value in error["ctx"].items()
            }
        formatted_errors.append(formatted_error)

    logger.warning(
        "Validation error",
        ip=host(request),
        endpoint=request.url.path,
        errors=formatted_errors,
    )

    return ORJSONResponse(
        status_code=HTTP_422_UNPROCESSABLE_CONTENT,
        content={
            "detail": "Validation failed",
            "errors": formatted_errors,
        },
    )
