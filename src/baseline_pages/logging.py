"""
Structured logging for baseline-pages.

Configures structlog once at startup. Console output with colours when
stderr is a TTY, JSON lines otherwise. Everything is written to stderr so
stdout stays free for command output such as ``classify --json``.

Examples:
    >>> from baseline_pages.logging import configure_logging, get_logger
    >>> configure_logging(level="INFO", json_format=True)
    >>> logger = get_logger(__name__)
    >>> logger.info("partition_written", path="data/high.json", records=412)

Guardrails:
    - Service name stored globally (set once at startup)
    - ``@timestamp`` / ``log.level`` field names in JSON mode
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

_SERVICE_NAME = "baseline-pages"


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service.name", _SERVICE_NAME)
    return event_dict


def _elasticsearch_compatible(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Rename timestamp/level to ECS field names."""
    if "timestamp" in event_dict:
        event_dict["@timestamp"] = event_dict.pop("timestamp")
    if "level" in event_dict:
        event_dict["log.level"] = event_dict.pop("level")
    return event_dict


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "baseline-pages",
) -> None:
    """Configure structured logging for the process.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: True for JSON, False for console, None for auto (JSON if not tty)
        service: Service name to include in logs
    """
    global _SERVICE_NAME
    _SERVICE_NAME = service

    if json_format is None:
        json_format = not sys.stderr.isatty()

    shared_processors: list[Processor] = [
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _add_service_metadata,
    ]

    if json_format:
        shared_processors.append(_elasticsearch_compatible)
        shared_processors.append(structlog.processors.format_exc_info)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    numeric_level = getattr(logging, level.upper())

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    # httpx and friends log through the standard library
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (usually ``get_logger(__name__)``)."""
    if name is None:
        return structlog.get_logger()
    # PrintLogger has no .name, so the logger name travels as bound context
    return structlog.get_logger(logger_name=name)


def bind_context(**kwargs: Any) -> None:
    """Bind context to include in all subsequent logs."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove specific keys from logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


class LogContext:
    """Context manager for scoped logging context.

    Example:
        with LogContext(run_id="abc123"):
            logger.info("stage_started", stage="fetch")
        # run_id unbound here
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs

    def __enter__(self) -> LogContext:
        bind_context(**self._context)
        return self

    def __exit__(self, *args) -> None:
        unbind_context(*self._context.keys())


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "unbind_context",
    "LogContext",
]
