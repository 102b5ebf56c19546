"""GET {api_prefix}/health: named liveness checks folded into one status."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from enum import StrEnum

from fastapi import Request
from pydantic import BaseModel, Field
from sqlalchemy import text

from tasktrack.core.logging import get_logger
from tasktrack.core.schemas import DataEnvelope

from ..dependencies import get_database
from ..router import Router

logger = get_logger(__name__)


class HealthState(StrEnum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


_SEVERITY = {HealthState.HEALTHY: 0, HealthState.DEGRADED: 1, HealthState.UNHEALTHY: 2}

type HealthCheck = Callable[[Request], Awaitable[tuple[HealthState, str | None]]]


class CheckResult(BaseModel):
    state: HealthState
    message: str | None = Field(default=None, description="Why the check is not healthy, if it is not")


class HealthStatus(BaseModel):
    """Worst state across all checks, plus each check's own result."""

    status: HealthState
    checks: dict[str, CheckResult] | None = None


async def check_database(request: Request) -> tuple[HealthState, str | None]:
    """Run ``SELECT 1`` on the service database."""
    try:
        async with get_database(request).session() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        return HealthState.UNHEALTHY, f"Database connection failed: {e}"
    return HealthState.HEALTHY, None


async def run_checks(request: Request, checks: Mapping[str, HealthCheck]) -> HealthStatus:
    """Run every check in order; a check that raises counts as unhealthy."""
    if not checks:
        return HealthStatus(status=HealthState.HEALTHY)

    results: dict[str, CheckResult] = {}
    for name, check in checks.items():
        try:
            state, message = await check(request)
        except Exception as e:
            state, message = HealthState.UNHEALTHY, f"Check failed: {e}"
        results[name] = CheckResult(state=state, message=message)

    overall = max((result.state for result in results.values()), key=_SEVERITY.__getitem__)
    return HealthStatus(status=overall, checks=results)


class HealthRouter(Router):
    """Serves the aggregated health status at the router prefix."""

    def __init__(
        self,
        prefix: str,
        tags: list[str],
        checks: Mapping[str, HealthCheck] | None = None,
        **kwargs: object,
    ) -> None:
        self.checks = dict(checks or {})
        super().__init__(prefix=prefix, tags=tags, **kwargs)

    def _register_routes(self) -> None:
        checks = self.checks

        @self.router.get(
            "",
            summary="Health check",
            response_model=DataEnvelope[HealthStatus],
            response_model_exclude_none=True,
        )
        async def health(request: Request) -> DataEnvelope[HealthStatus]:
            status = await run_checks(request, checks)
            if status.status is not HealthState.HEALTHY:
                logger.warning("health.degraded", status=status.status.value, checks=sorted(status.checks or {}))
            return DataEnvelope(data=status)
