from __future__ import annotations

import inspect
from collections.abc import Mapping
from datetime import datetime, timezone
from time import monotonic, perf_counter
from typing import Any, Awaitable, Callable, Union

from starlette.requests import Request
from starlette.responses import JSONResponse

from optima_core.config import get_cached_build_info
from optima_core.diagnostics.schemas import HealthCheckResult, HealthResponse


ProbeResult = Union[HealthCheckResult, Mapping[str, Any]]
HealthCheckFn = Callable[[], Union[ProbeResult, Awaitable[ProbeResult]]]
HealthChecks = Mapping[str, HealthCheckFn]

NO_STORE_HEADERS = {"Cache-Control": "no-store"}

STARTED_AT = datetime.now(timezone.utc)
_STARTED_MONOTONIC = monotonic()


def uptime_seconds() -> int:
    return int(monotonic() - _STARTED_MONOTONIC)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


async def _run_probe(probe: HealthCheckFn) -> HealthCheckResult:
    result = probe()
    if inspect.isawaitable(result):
        result = await result
    if isinstance(result, HealthCheckResult):
        return result
    return HealthCheckResult.model_validate(result)


async def run_health_checks(service_name: str, checks: HealthChecks | None = None) -> HealthResponse:
    """Run every probe in order and aggregate the results.

    A probe that raises is reported as unhealthy with the exception message;
    it never propagates to the caller.
    """

    build_info = get_cached_build_info()
    results: dict[str, HealthCheckResult] = {}
    healthy = True

    for name, probe in (checks or {}).items():
        start = perf_counter()
        try:
            result = await _run_probe(probe)
            elapsed_ms = (perf_counter() - start) * 1000.0
            results[name] = result.model_copy(update={"latency_ms": round(elapsed_ms, 2)})
            if result.status == "unhealthy":
                healthy = False
        except Exception as exc:  # noqa: BLE001
            elapsed_ms = (perf_counter() - start) * 1000.0
            healthy = False
            results[name] = HealthCheckResult(
                status="unhealthy",
                latency_ms=round(elapsed_ms, 2),
                error=str(exc),
            )

    return HealthResponse(
        status="healthy" if healthy else "unhealthy",
        service=service_name,
        version=build_info.version,
        git_commit=build_info.short_commit,
        git_branch=build_info.git_branch,
        environment=build_info.environment,
        uptime_seconds=uptime_seconds(),
        timestamp=_utc_now_iso(),
        checks=results,
    )


def create_health_handler(
    service_name: str,
    checks: HealthChecks | None = None,
) -> Callable[[Request], Awaitable[JSONResponse]]:
    """Build a ``GET /health`` endpoint: 200 when healthy, 503 otherwise.

    Example::

        async def database() -> dict:
            await pool.execute("SELECT 1")
            return {"status": "healthy"}

        routes = [Route("/health", create_health_handler("agentic-chat", {"database": database}))]
    """

    async def health(request: Request) -> JSONResponse:
        _ = request
        result = await run_health_checks(service_name, checks)
        return JSONResponse(
            content=result.to_payload(),
            status_code=200 if result.status == "healthy" else 503,
            headers=NO_STORE_HEADERS,
        )

    return health
