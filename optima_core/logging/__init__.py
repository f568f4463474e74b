from optima_core.logging.logger import (
    LogFormat,
    Logger,
    LogLevel,
    NoopLogger,
    configure_logger,
    create_logger,
    get_logger,
    reset_logger,
)
from optima_core.logging.stdlib_bridge import configure_logging

__all__ = [
    "LogFormat",
    "LogLevel",
    "Logger",
    "NoopLogger",
    "configure_logger",
    "configure_logging",
    "create_logger",
    "get_logger",
    "reset_logger",
]
