"""Route stdlib logging (uvicorn, httpx, ...) through the same structured format."""

from __future__ import annotations

import logging
import sys

import structlog

from optima_core.logging.logger import Logger, configure_logger, resolve_format, resolve_level
from optima_core.logging.processors import order_entry, renderer_for, shared_processors


_BRIDGE_HANDLER: logging.Handler | None = None


def configure_logging(service_name: str, format: str | None = None, level: str | None = None) -> Logger:
    """Configure the default logger and attach a structured handler to the root logger.

    Safe to call multiple times: the handler installed by a previous call is
    replaced, other root handlers are left alone.
    """

    global _BRIDGE_HANDLER

    log_format = resolve_format(format)
    log_level = resolve_level(level)

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors(service_name),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            order_entry,
            renderer_for(log_format),
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    if _BRIDGE_HANDLER is not None:
        root.removeHandler(_BRIDGE_HANDLER)
    root.addHandler(handler)
    root.setLevel(log_level)

    # Keep uvicorn's own loggers consistent with our handler.
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logger = logging.getLogger(name)
        logger.handlers = [handler]
        logger.propagate = False
        logger.setLevel(log_level)

    _BRIDGE_HANDLER = handler
    return configure_logger(service_name, format=format, level=level)
