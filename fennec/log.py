"""Logging for fennec: structlog loggers backed by stdlib ``logging``.

Every logger lives under the ``fennec`` stdlib logger, so the host
application's logging setup decides what is shown. With no setup at all,
fennec's debug lines are dropped like any other stdlib debug record.
"""

import logging
import sys
from typing import Any, List, Optional, Union

import structlog


LogLevel = Union[int, str]

ROOT_LOGGER_NAME = "fennec"


def _as_level(level: LogLevel) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper())
    return level


def _qualified(name: str) -> str:
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return name
    return f"{ROOT_LOGGER_NAME}.{name}"


def configure_logging(
    level: LogLevel = "INFO",
    *,
    json_logs: bool = False,
    stream: Optional[Any] = None,
) -> logging.Handler:
    """Send fennec's log records to ``stream`` (stderr by default).

    Only the ``fennec`` logger is touched: its handlers are replaced, its
    level set and propagation to the root logger switched off. structlog is
    configured to render through stdlib, as JSON or as console output.

    Args:
        level: Logging level for the ``fennec`` logger
        json_logs: Render JSON lines instead of console output
        stream: Stream to write to; defaults to ``sys.stderr``

    Returns:
        The installed handler
    """
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    fennec_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for existing in list(fennec_logger.handlers):
        fennec_logger.removeHandler(existing)
    fennec_logger.addHandler(handler)
    fennec_logger.setLevel(_as_level(level))
    fennec_logger.propagate = False

    processors: List[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]
    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
    )
    return handler


def get_logger(name: str, log_level: Optional[LogLevel] = None) -> Any:
    """Get a structlog logger wrapping the stdlib logger ``fennec.<name>``.

    Args:
        name: The name of the logger, prefixed with 'fennec.' unless it already is
        log_level: The logging level to set on the underlying stdlib logger

    Returns:
        A structlog bound logger
    """
    name = _qualified(name)
    stdlib_logger = logging.getLogger(name)
    if log_level is not None:
        stdlib_logger.setLevel(_as_level(log_level))
    return structlog.wrap_logger(stdlib_logger, wrapper_class=structlog.stdlib.BoundLogger)


__all__ = ["configure_logging", "get_logger", "LogLevel", "ROOT_LOGGER_NAME"]
