from __future__ import annotations

import functools
from collections.abc import Mapping
from time import perf_counter
from typing import Any, Awaitable, Callable

from starlette.requests import Request
from starlette.responses import Response

from optima_core.config import get_cached_build_info
from optima_core.tracing.context import (
    TraceContext,
    get_trace_context,
    parse_trace_context_from_headers,
    run_with_trace_context,
)
from optima_core.tracing.ids import generate_request_id, generate_trace_id


TRACE_ID_HEADER = "X-Trace-ID"
REQUEST_ID_HEADER = "X-Request-ID"
PARENT_SPAN_ID_HEADER = "X-Parent-Span-ID"
DEPLOYMENT_ID_HEADER = "X-Deployment-ID"
RESPONSE_TIME_HEADER = "X-Response-Time"
SERVED_BY_HEADER = "X-Served-By"

Handler = Callable[..., Awaitable[Response]]


def default_service_short(service_name: str) -> str:
    return service_name[:4]


def build_trace_context(headers: Mapping[str, str], service_short: str) -> TraceContext:
    """Continue the upstream trace when one is present, otherwise start a new one."""

    upstream = parse_trace_context_from_headers(headers)
    return TraceContext(
        trace_id=upstream.trace_id or generate_trace_id(service_short),
        request_id=generate_request_id(service_short),
        parent_span_id=upstream.parent_span_id,
    )


def tracing_headers(context: TraceContext, service_name: str, duration_ms: float) -> dict[str, str]:
    build_info = get_cached_build_info()
    headers: dict[str, str] = {}

    if context.trace_id:
        headers[TRACE_ID_HEADER] = context.trace_id
    if context.request_id:
        headers[REQUEST_ID_HEADER] = context.request_id

    headers[RESPONSE_TIME_HEADER] = f"{duration_ms:.2f}ms"
    headers[SERVED_BY_HEADER] = f"{service_name}-{build_info.short_commit}"

    if build_info.deployment_id:
        headers[DEPLOYMENT_ID_HEADER] = build_info.deployment_id

    return headers


def add_tracing_headers(
    response: Response,
    context: TraceContext,
    *,
    service_name: str,
    duration_ms: float,
) -> Response:
    """Stamp tracing headers on ``response`` in place.

    Headers the handler already set win over the generated ones.
    """

    for name, value in tracing_headers(context, service_name, duration_ms).items():
        response.headers.setdefault(name, value)
    return response


def with_tracing(handler: Handler, service_name: str, service_short: str | None = None) -> Handler:
    """Wrap a Starlette/FastAPI endpoint so it runs inside a trace context.

    Example::

        async def list_users(request: Request) -> Response:
            return JSONResponse({"users": []})

        routes = [Route("/users", with_tracing(list_users, service_name="agentic-chat", service_short="chat"))]
    """

    if not service_name:
        raise ValueError("service_name must not be empty")

    short = service_short or default_service_short(service_name)

    @functools.wraps(handler)
    async def traced_handler(request: Request, *args: Any, **kwargs: Any) -> Response:
        start = perf_counter()
        context = build_trace_context(request.headers, short)

        response = await run_with_trace_context(context, handler, request, *args, **kwargs)

        elapsed_ms = (perf_counter() - start) * 1000.0
        return add_tracing_headers(response, context, service_name=service_name, duration_ms=elapsed_ms)

    return traced_handler


def traced(service_name: str, service_short: str | None = None) -> Callable[[Handler], Handler]:
    """Decorator form of ``with_tracing``."""

    def decorator(handler: Handler) -> Handler:
        return with_tracing(handler, service_name, service_short)

    return decorator


def get_trace_headers() -> dict[str, str]:
    """Headers to forward to downstream services.

    The current request id is sent as the next hop's ``X-Parent-Span-ID``;
    our own parent span id is not forwarded.
    """

    context = get_trace_context()
    build_info = get_cached_build_info()
    headers: dict[str, str] = {}

    if context.trace_id:
        headers[TRACE_ID_HEADER] = context.trace_id
    if context.request_id:
        headers[PARENT_SPAN_ID_HEADER] = context.request_id
    if build_info.deployment_id:
        headers[DEPLOYMENT_ID_HEADER] = build_info.deployment_id

    return headers
