from __future__ import annotations

from collections.abc import Iterable, Mapping

from fastapi import APIRouter

from optima_core.diagnostics.endpoints import create_debug_config_handler, create_debug_info_handler
from optima_core.diagnostics.health import HealthChecks, create_health_handler


def create_diagnostics_router(
    service_name: str,
    checks: HealthChecks | None = None,
    *,
    debug_info_requires_key: bool = False,
    allowed_prefixes: Iterable[str] | None = None,
    build_time_env: Mapping[str, str | None] | None = None,
) -> APIRouter:
    """Router exposing ``/health``, ``/debug/info`` and ``/debug/config``.

    Raises:
        ValueError: Raised when service_name is empty.
    """

    if not service_name:
        raise ValueError("service_name must not be empty")

    router = APIRouter(tags=["diagnostics"])
    router.add_api_route("/health", create_health_handler(service_name, checks), methods=["GET"])
    router.add_api_route(
        "/debug/info",
        create_debug_info_handler(require_key=debug_info_requires_key),
        methods=["GET"],
    )
    router.add_api_route(
        "/debug/config",
        create_debug_config_handler(allowed_prefixes=allowed_prefixes, build_time_env=build_time_env),
        methods=["GET"],
    )
    return router
