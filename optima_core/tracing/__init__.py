from optima_core.tracing.context import (
    TraceContext,
    get_parent_span_id,
    get_request_id,
    get_trace_context,
    get_trace_id,
    parse_trace_context_from_headers,
    run_with_trace_context,
    trace_context,
)
from optima_core.tracing.ids import ParsedTraceId, generate_request_id, generate_trace_id, parse_trace_id
from optima_core.tracing.middleware import (
    DEPLOYMENT_ID_HEADER,
    PARENT_SPAN_ID_HEADER,
    REQUEST_ID_HEADER,
    RESPONSE_TIME_HEADER,
    SERVED_BY_HEADER,
    TRACE_ID_HEADER,
    add_tracing_headers,
    build_trace_context,
    get_trace_headers,
    traced,
    with_tracing,
)

__all__ = [
    "DEPLOYMENT_ID_HEADER",
    "PARENT_SPAN_ID_HEADER",
    "REQUEST_ID_HEADER",
    "RESPONSE_TIME_HEADER",
    "SERVED_BY_HEADER",
    "TRACE_ID_HEADER",
    "ParsedTraceId",
    "TraceContext",
    "add_tracing_headers",
    "build_trace_context",
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
    "trace_context",
    "traced",
    "with_tracing",
]
