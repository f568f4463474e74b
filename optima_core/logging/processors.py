"""structlog processors shared by the console logger and the stdlib bridge."""

from __future__ import annotations

import sys
import traceback
from typing import Any

import structlog

from optima_core.config import get_cached_build_info
from optima_core.tracing.context import get_trace_context


EventDict = dict[str, Any]

LEVEL_ALIASES = {
    "warning": "warn",
    "critical": "error",
    "exception": "error",
    "fatal": "error",
}

ENTRY_FIELDS = (
    "timestamp",
    "level",
    "service",
    "version",
    "gitCommit",
    "environment",
    "deploymentId",
    "traceId",
    "requestId",
    "parentSpanId",
    "message",
    "extra",
    "exception",
)


def add_level(_: Any, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict["level"] = LEVEL_ALIASES.get(method_name, method_name)
    return event_dict


add_timestamp = structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp")

rename_event = structlog.processors.EventRenamer("message")


class ServiceInfoAdder:
    """Adds service identity and build metadata to every entry."""

    def __init__(self, service_name: str) -> None:
        self.service_name = service_name

    def __call__(self, _: Any, __: str, event_dict: EventDict) -> EventDict:
        build_info = get_cached_build_info()
        event_dict["service"] = self.service_name
        event_dict["version"] = build_info.version
        event_dict["gitCommit"] = build_info.short_commit
        event_dict["environment"] = build_info.environment
        if build_info.deployment_id:
            event_dict["deploymentId"] = build_info.deployment_id
        return event_dict


def add_trace_context(_: Any, __: str, event_dict: EventDict) -> EventDict:
    context = get_trace_context()
    if context.trace_id:
        event_dict["traceId"] = context.trace_id
    if context.request_id:
        event_dict["requestId"] = context.request_id
    if context.parent_span_id:
        event_dict["parentSpanId"] = context.parent_span_id
    return event_dict


def _exception_from(exc_info: Any) -> BaseException | None:
    if isinstance(exc_info, BaseException):
        return exc_info
    if isinstance(exc_info, tuple):
        return exc_info[1]
    if exc_info:
        # exc_info=True: the exception currently being handled.
        return sys.exc_info()[1]
    return None


def add_exception_detail(_: Any, __: str, event_dict: EventDict) -> EventDict:
    exc = _exception_from(event_dict.pop("exc_info", None))
    if exc is None:
        return event_dict

    detail = {"type": type(exc).__name__, "message": str(exc)}
    if exc.__traceback__ is not None:
        detail["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).rstrip()

    event_dict["exception"] = detail
    return event_dict


def order_entry(_: Any, __: str, event_dict: EventDict) -> EventDict:
    """Lay the entry out in log-entry field order; unknown keys follow."""

    ordered = {name: event_dict.pop(name) for name in ENTRY_FIELDS if name in event_dict}
    ordered.update(event_dict)
    return ordered


def render_text(_: Any, __: str, event_dict: EventDict) -> str:
    parts = [
        str(event_dict.get("timestamp", "")),
        f"[{str(event_dict.get('level', '')).upper()}]",
        str(event_dict.get("service", "")),
        "-",
        str(event_dict.get("message", "")),
    ]

    if event_dict.get("traceId"):
        parts.append(f"| trace_id={event_dict['traceId']}")

    exception = event_dict.get("exception")
    if exception:
        parts.append(f"\n{exception.get('stack') or exception.get('message')}")

    return " ".join(parts)


render_json = structlog.processors.JSONRenderer()


def shared_processors(service_name: str) -> list[Any]:
    return [
        add_level,
        add_timestamp,
        rename_event,
        ServiceInfoAdder(service_name),
        add_trace_context,
        add_exception_detail,
    ]


def renderer_for(log_format: str) -> Any:
    return render_text if log_format == "text" else render_json
