from optima_core.diagnostics.endpoints import (
    DEFAULT_ALLOWED_PREFIXES,
    create_debug_config_handler,
    create_debug_info_handler,
    get_debug_config,
    get_debug_info,
    mask_value,
    validate_debug_key,
)
from optima_core.diagnostics.health import HealthCheckFn, HealthChecks, create_health_handler, run_health_checks
from optima_core.diagnostics.router import create_diagnostics_router
from optima_core.diagnostics.schemas import (
    DebugConfigResponse,
    DebugInfoResponse,
    HealthCheckResult,
    HealthResponse,
)

__all__ = [
    "DEFAULT_ALLOWED_PREFIXES",
    "DebugConfigResponse",
    "DebugInfoResponse",
    "HealthCheckFn",
    "HealthCheckResult",
    "HealthChecks",
    "HealthResponse",
    "create_debug_config_handler",
    "create_debug_info_handler",
    "create_diagnostics_router",
    "create_health_handler",
    "get_debug_config",
    "get_debug_info",
    "mask_value",
    "run_health_checks",
    "validate_debug_key",
]
