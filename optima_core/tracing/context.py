"""Async-scoped trace context.

The active ``TraceContext`` lives in a ``ContextVar``. asyncio gives every task
its own copy of the context, so overlapping requests on one event loop never
see each other's ids.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from starlette.datastructures import Headers


T = TypeVar("T")


@dataclass(frozen=True)
class TraceContext:
    trace_id: str | None = None
    request_id: str | None = None
    parent_span_id: str | None = None


_EMPTY = TraceContext()

_trace_context: ContextVar[TraceContext] = ContextVar("optima_trace_context", default=_EMPTY)


def get_trace_context() -> TraceContext:
    return _trace_context.get()


def get_trace_id() -> str | None:
    return get_trace_context().trace_id


def get_request_id() -> str | None:
    return get_trace_context().request_id


def get_parent_span_id() -> str | None:
    return get_trace_context().parent_span_id


@contextmanager
def trace_context(context: TraceContext) -> Iterator[TraceContext]:
    """Install ``context`` for the body of the ``with`` block."""

    token = _trace_context.set(context)
    try:
        yield context
    finally:
        _trace_context.reset(token)


async def _await_in_context(context: TraceContext, awaitable: Awaitable[T]) -> T:
    with trace_context(context):
        return await awaitable


def run_with_trace_context(context: TraceContext, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Run ``fn`` with ``context`` as the ambient trace context.

    When ``fn`` is a coroutine function the returned coroutine must be awaited;
    it re-installs the context around its own execution so every suspension
    point inside ``fn`` still sees it.

    Example::

        async def handler() -> None:
            logger.info("working", {"trace": get_trace_id()})

        await run_with_trace_context(TraceContext(trace_id="trace-123"), handler)
    """

    with trace_context(context):
        result = fn(*args, **kwargs)

    if inspect.isawaitable(result):
        return _await_in_context(context, result)
    return result


def parse_trace_context_from_headers(headers: Mapping[str, str]) -> TraceContext:
    # request_id is minted by every service itself and never read from headers.
    if not isinstance(headers, Headers):
        headers = Headers(headers=dict(headers))

    return TraceContext(
        trace_id=headers.get("X-Trace-ID") or None,
        parent_span_id=headers.get("X-Parent-Span-ID") or None,
    )
