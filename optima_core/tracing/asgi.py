from __future__ import annotations

from time import perf_counter
from typing import Any, Callable, Iterable

from starlette.datastructures import Headers, MutableHeaders

from optima_core.logging import get_logger
from optima_core.tracing.context import trace_context
from optima_core.tracing.middleware import build_trace_context, default_service_short, tracing_headers


DEFAULT_EXCLUDED_PATHS = frozenset({"/health", "/debug/info", "/debug/config"})


class TracingMiddleware:
    """Adds a trace context, tracing headers and an access log to every HTTP request."""

    def __init__(
        self,
        app: Callable[..., Any],
        service_name: str,
        service_short: str | None = None,
        excluded_paths: Iterable[str] | None = None,
    ) -> None:
        if not service_name:
            raise ValueError("service_name must not be empty")

        self.app = app
        self.service_name = service_name
        self.service_short = service_short or default_service_short(service_name)
        # Diagnostics endpoints are served untraced.
        self._excluded_paths = frozenset(DEFAULT_EXCLUDED_PATHS if excluded_paths is None else excluded_paths)

    def _is_excluded(self, path: str) -> bool:
        # Suffix match, so routers mounted under a prefix are covered too.
        return any(path.endswith(excluded) for excluded in self._excluded_paths)

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http" or self._is_excluded(scope.get("path", "")):
            await self.app(scope, receive, send)
            return

        start = perf_counter()
        context = build_trace_context(Headers(scope=scope), self.service_short)
        status_code: int = 500

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal status_code

            if message.get("type") == "http.response.start":
                status_code = int(message.get("status", 500))
                elapsed_ms = (perf_counter() - start) * 1000.0
                headers = MutableHeaders(scope=message)
                for name, value in tracing_headers(context, self.service_name, elapsed_ms).items():
                    headers.setdefault(name, value)

            await send(message)

        with trace_context(context):
            try:
                await self.app(scope, receive, send_wrapper)
            finally:
                elapsed_ms = (perf_counter() - start) * 1000.0
                get_logger().info(
                    "http_request",
                    {
                        "method": scope.get("method"),
                        "path": scope.get("path"),
                        "status_code": status_code,
                        "elapsed_ms": round(elapsed_ms, 2),
                    },
                )
