from __future__ import annotations

import logging
import sys
from typing import Any, Literal

import structlog

from optima_core.config import get_settings
from optima_core.logging.processors import order_entry, renderer_for, shared_processors


LogLevel = Literal["debug", "info", "warn", "error"]
LogFormat = Literal["json", "text"]

LOG_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def resolve_level(level: str | None) -> int:
    """Map a level name to a stdlib level number; unknown names mean info."""

    if level is None:
        level = get_settings().log_level
    return LOG_LEVELS.get(level.strip().lower(), logging.INFO)


def resolve_format(log_format: str | None) -> str:
    if log_format is None:
        log_format = get_settings().log_format
    return "text" if log_format.strip().lower() == "text" else "json"


class ConsoleLogger:
    """structlog output sink: debug/info to stdout, warn/error to stderr."""

    def _write(self, stream_name: str, message: str) -> None:
        stream = getattr(sys, stream_name)
        stream.write(message + "\n")
        stream.flush()

    def debug(self, message: str) -> None:
        self._write("stdout", message)

    info = debug

    def warning(self, message: str) -> None:
        self._write("stderr", message)

    error = warning
    critical = warning
    msg = debug


class Logger:
    """Structured logger bound to one service."""

    service_name: str | None
    format: str
    level: int

    def __init__(self, service_name: str, log_format: str, level: int) -> None:
        self.service_name = service_name
        self.format = log_format
        self.level = level
        self._logger = structlog.wrap_logger(
            ConsoleLogger(),
            processors=[*shared_processors(service_name), order_entry, renderer_for(log_format)],
            wrapper_class=structlog.make_filtering_bound_logger(level),
            context_class=dict,
            cache_logger_on_first_use=True,
        )

    @staticmethod
    def _fields(extra: dict[str, Any] | None, error: BaseException | None = None) -> dict[str, Any]:
        fields: dict[str, Any] = {}
        if extra:
            fields["extra"] = extra
        if error is not None:
            fields["exc_info"] = error
        return fields

    def debug(self, message: str, extra: dict[str, Any] | None = None) -> None:
        self._logger.debug(message, **self._fields(extra))

    def info(self, message: str, extra: dict[str, Any] | None = None) -> None:
        self._logger.info(message, **self._fields(extra))

    def warn(self, message: str, extra: dict[str, Any] | None = None) -> None:
        self._logger.warning(message, **self._fields(extra))

    warning = warn

    def error(
        self,
        message: str,
        extra: dict[str, Any] | None = None,
        error: BaseException | None = None,
    ) -> None:
        self._logger.error(message, **self._fields(extra, error))

    def exception(self, message: str, error: BaseException, extra: dict[str, Any] | None = None) -> None:
        self._logger.error(message, **self._fields(extra, error))


class NoopLogger(Logger):
    """Returned by ``get_logger`` until a default logger is configured."""

    def __init__(self) -> None:
        self.service_name = None
        self.format = "json"
        self.level = logging.CRITICAL + 1

    def debug(self, message: str, extra: dict[str, Any] | None = None) -> None:
        pass

    def info(self, message: str, extra: dict[str, Any] | None = None) -> None:
        pass

    def warn(self, message: str, extra: dict[str, Any] | None = None) -> None:
        pass

    warning = warn

    def error(
        self,
        message: str,
        extra: dict[str, Any] | None = None,
        error: BaseException | None = None,
    ) -> None:
        pass

    def exception(self, message: str, error: BaseException, extra: dict[str, Any] | None = None) -> None:
        pass


def create_logger(service_name: str, format: str | None = None, level: str | None = None) -> Logger:
    """Create a structured logger.

    ``format`` and ``level`` default to ``LOG_FORMAT`` / ``LOG_LEVEL``
    (``json`` / ``info``).

    Example::

        logger = create_logger("agentic-chat")
        logger.info("Request processed", {"user_id": "123"})
    """

    return Logger(service_name, resolve_format(format), resolve_level(level))


_DEFAULT_LOGGER: Logger | None = None
_NOOP_LOGGER = NoopLogger()


def configure_logger(service_name: str, format: str | None = None, level: str | None = None) -> Logger:
    global _DEFAULT_LOGGER
    _DEFAULT_LOGGER = create_logger(service_name, format=format, level=level)
    return _DEFAULT_LOGGER


def get_logger() -> Logger:
    if _DEFAULT_LOGGER is None:
        return _NOOP_LOGGER
    return _DEFAULT_LOGGER


def reset_logger() -> None:
    """Drop the default logger (used by tests)."""

    global _DEFAULT_LOGGER
    _DEFAULT_LOGGER = None
