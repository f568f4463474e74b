"""optima-core: observability primitives shared by ASGI services.

Health and debug endpoints, structured logging, request tracing and traced
outbound HTTP calls.

Example::

    from fastapi import FastAPI
    from optima_core import TracingMiddleware, configure_logging, create_diagnostics_router

    configure_logging("agentic-chat")

    app = FastAPI()
    app.add_middleware(TracingMiddleware, service_name="agentic-chat", service_short="chat")
    app.include_router(create_diagnostics_router("agentic-chat", {"database": check_database}))
"""

from optima_core.config import BuildInfo, get_build_info, get_cached_build_info
from optima_core.diagnostics import (
    DebugConfigResponse,
    DebugInfoResponse,
    HealthCheckFn,
    HealthCheckResult,
    HealthChecks,
    HealthResponse,
    create_debug_config_handler,
    create_debug_info_handler,
    create_diagnostics_router,
    create_health_handler,
    get_debug_config,
    get_debug_info,
    run_health_checks,
)
from optima_core.http import TracedClient, create_traced_client, traced_fetch
from optima_core.logging import LogLevel, Logger, configure_logger, configure_logging, create_logger, get_logger
from optima_core.tracing import (
    DEPLOYMENT_ID_HEADER,
    PARENT_SPAN_ID_HEADER,
    REQUEST_ID_HEADER,
    RESPONSE_TIME_HEADER,
    SERVED_BY_HEADER,
    TRACE_ID_HEADER,
    TraceContext,
    add_tracing_headers,
    generate_request_id,
    generate_trace_id,
    get_parent_span_id,
    get_request_id,
    get_trace_context,
    get_trace_headers,
    get_trace_id,
    parse_trace_context_from_headers,
    parse_trace_id,
    run_with_trace_context,
    traced,
    with_tracing,
)
from optima_core.tracing.asgi import TracingMiddleware

__version__ = "0.1.0"

__all__ = [
    # Config
    "BuildInfo",
    "get_build_info",
    "get_cached_build_info",
    # Diagnostics
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
    "run_health_checks",
    # Logging
    "LogLevel",
    "Logger",
    "configure_logger",
    "configure_logging",
    "create_logger",
    "get_logger",
    # Tracing
    "DEPLOYMENT_ID_HEADER",
    "PARENT_SPAN_ID_HEADER",
    "REQUEST_ID_HEADER",
    "RESPONSE_TIME_HEADER",
    "SERVED_BY_HEADER",
    "TRACE_ID_HEADER",
    "TraceContext",
    "TracingMiddleware",
    "add_tracing_headers",
    "generate_request_id",
    "generate_trace_id",
    "get_parent_span_id",
    "get_request_id",
    "get_trace_context",
    "get_trace_headers",
    "get_trace_id",
    "parse_trace_context_from_headers",
    "parse_trace_id",
    "run_with_trace_context",
    "traced",
    "with_tracing",
    # HTTP
    "TracedClient",
    "create_traced_client",
    "traced_fetch",
]
