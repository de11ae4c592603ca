from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR
from structlog.stdlib import BoundLogger

from journal.utils.helpers import host

RESERVED_ATTRS = frozenset({"status_code", "detail", "headers"})


class BaseAppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        detail: str = "Internal Server Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code
        self.headers = headers

    def __str__(self) -> str:
        return self.detail


def create_exception_handler(
    logger: BoundLogger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a standardized exception handler for the application.

    The response body is ``{"detail": ...}`` plus any extra public
    attributes set on the exception (e.g. ``allowed_types``).

    Args:
        logger: Logger instance to use for logging exceptions.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        status_code = getattr(exc, "status_code", HTTP_500_INTERNAL_SERVER_ERROR)
        detail = getattr(exc, "detail", "Internal Server Error")
        headers = getattr(exc, "headers", None)

        logger.warning(
            detail,
            status_code=status_code,
            ip=host(request),
            endpoint=request.url.path,
        )

        content: dict[str, Any] = {"detail": detail}
        content.update(
            {
                k: v
                for k, v in vars(exc).items()
                if k not in RESERVED_ATTRS and not k.startswith("_")
            },
        )

        return ORJSONResponse(content=content, status_code=status_code, headers=headers)

    return handler
