"""Rate limiter configuration using slowapi."""

from typing import cast

from fastapi import Request
from fastapi.responses import ORJSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.status import HTTP_429_TOO_MANY_REQUESTS

from journal.configs import LimiterConfig
from journal.monitoring import get_logger

logger = get_logger(__name__)

AUTH_RATE_LIMIT = "10/minute"
UPLOAD_RATE_LIMIT = "30/minute"


def get_identifier(request: Request) -> str:
    """
    Get unique identifier for rate limiting.

    Signed-in callers are keyed by their bearer token, everyone else by IP.

    Args:
        request: FastAPI request object.

    Returns:
        Unique identifier string.
    """
    authorization = request.headers.get("Authorization", "")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() == "bearer" and token:
        return f"token:{token[-16:]}"
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(**LimiterConfig().model_dump(), key_func=get_identifier)


async def rate_limit_exceeded_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle rate limit exceeded exceptions.

    Args:
        request: FastAPI request object.
        exc: RateLimitExceeded exception.

    Returns:
        JSON response with error details.
    """
    http_exc = cast(RateLimitExceeded, exc)
    logger.warning(
        "Rate limit exceeded",
        limit=http_exc.detail,
        endpoint=request.url.path,
        identifier=get_identifier(request).split(":", 1)[0],
    )
    return ORJSONResponse(
        status_code=HTTP_429_TOO_MANY_REQUESTS,
        content={
            "detail": "Rate limit exceeded",
            "allowed_requests": http_exc.detail,
        },
    )
