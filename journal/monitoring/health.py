"""
Liveness and readiness health checks.

- ``/health/live``: the process answers, no external dependencies touched
- ``/health/ready``: the database answers ``SELECT 1`` within the timeout

Response Format
---------------
{
    "status": "ready" | "not_ready" | "live",
    "timestamp": "2025-01-01 12:00:00",
    "version": "1.0.0",
    "checks": {"database": {"status": "pass", "response_ms": 15}}
}
"""

from asyncio import wait_for
from dataclasses import dataclass, field
from enum import StrEnum
from time import perf_counter
from typing import Annotated, Any

from fastapi import APIRouter, Depends, FastAPI
from fastapi.responses import ORJSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_200_OK, HTTP_503_SERVICE_UNAVAILABLE

from journal.db import get_session
from journal.monitoring.logging import get_logger
from journal.utils.helpers import today_str

DATABASE_TIMEOUT = 2.0

logger = get_logger(__name__)


class CheckStatus(StrEnum):
    """Status values for individual health checks."""

    PASS = "pass"
    FAIL = "fail"


class OverallStatus(StrEnum):
    """Overall health status."""

    READY = "ready"
    NOT_READY = "not_ready"
    LIVE = "live"


@dataclass
class ComponentCheck:
    """Result of an individual health check component."""

    status: CheckStatus
    response_ms: int | None = None
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"status": self.status.value}
        if self.response_ms is not None:
            result["response_ms"] = self.response_ms
        if self.message is not None:
            result["message"] = self.message
        return result


@dataclass
class HealthStatus:
    """Complete health status response."""

    status: OverallStatus
    version: str
    timestamp: str = field(default_factory=today_str)
    checks: dict[str, ComponentCheck] = field(default_factory=dict)

    @property
    def is_healthy(self) -> bool:
        return self.status in (OverallStatus.READY, OverallStatus.LIVE)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "timestamp": self.timestamp,
            "version": self.version,
            "checks": {name: check.to_dict() for name, check in self.checks.items()},
        }


async def check_database(session: AsyncSession) -> ComponentCheck:
    """
    Check database connectivity.

    Args:
        session: Session to run the probe query on.

    Returns:
        ComponentCheck with database status.
    """
    start = perf_counter()
    try:
        await wait_for(session.execute(text("SELECT 1")), timeout=DATABASE_TIMEOUT)
    except TimeoutError:
        message = "Database check timed out"
    except (SQLAlchemyError, ConnectionError, OSError) as e:
        message = f"Database check failed: {e!s}"
    else:
        return ComponentCheck(
            status=CheckStatus.PASS,
            response_ms=int((perf_counter() - start) * 1000),
        )
    logger.warning(message)
    return ComponentCheck(
        status=CheckStatus.FAIL,
        response_ms=int((perf_counter() - start) * 1000),
        message=message,
    )


def setup_health_routes(app: FastAPI) -> None:
    """Register ``/health/live`` and ``/health/ready`` on ``app``."""
    router = APIRouter(prefix="/health", tags=["🩺 Health"])

    @router.get(
        "/live",
        summary="Liveness probe",
        response_class=ORJSONResponse,
        operation_id="health_live",
    )
    async def liveness() -> ORJSONResponse:
        status = HealthStatus(status=OverallStatus.LIVE, version=app.version)
        return ORJSONResponse(status.to_dict())

    @router.get(
        "/ready",
        summary="Readiness probe",
        response_class=ORJSONResponse,
        responses={503: {"description": "A dependency is unavailable"}},
        operation_id="health_ready",
    )
    async def readiness(
        session: Annotated[AsyncSession, Depends(get_session)],
    ) -> ORJSONResponse:
        db_check = await check_database(session)
        status = HealthStatus(
            status=OverallStatus.READY
            if db_check.status == CheckStatus.PASS
            else OverallStatus.NOT_READY,
            version=app.version,
            checks={"database": db_check},
        )
        return ORJSONResponse(
            status.to_dict(),
            status_code=HTTP_200_OK if status.is_healthy else HTTP_503_SERVICE_UNAVAILABLE,
        )

    app.include_router(router)
