"""Structured logging with bracketed progress tags.

This module configures structlog for the setup run. Every progress event
carries a ``tag`` key (START, OK, SKIP, ERROR, ...). Console output renders
it as a ``[TAG] message`` line; JSON output keeps it as a field.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from arbantv_setup.core.config import get_settings

# Tag used when an event does not carry one explicitly
_LEVEL_TAGS = {
    "debug": "DEBUG",
    "info": "INFO",
    "warning": "WARN",
    "error": "ERROR",
    "critical": "CRITICAL",
}

_CONSOLE_DROPPED_KEYS = ("timestamp", "level", "logger")


def add_default_tag(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Derive a tag from the log level when the caller did not pass one.

    Args:
        logger: Logger instance (unused).
        method_name: Name of the logging method that was called.
        event_dict: Event dictionary to modify.

    Returns:
        EventDict: Modified event dictionary with a ``tag`` key.
    """
    if not event_dict.get("tag"):
        event_dict["tag"] = _LEVEL_TAGS.get(method_name, method_name.upper())
    return event_dict


def rename_message_field(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename 'event' field to 'message' for compatibility.

    Args:
        logger: Logger instance (unused).
        method_name: Method name (unused).
        event_dict: Event dictionary to modify.

    Returns:
        EventDict: Modified event dictionary with message field.
    """
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def render_tagged_line(logger: Any, method_name: str, event_dict: EventDict) -> str:
    """Render an event as an indented ``[TAG] message key=value`` line.

    The optional ``indent`` key nests item-level lines under their
    collection. Remaining context keys are appended as ``key=value`` pairs.

    Args:
        logger: Logger instance (unused).
        method_name: Method name (unused).
        event_dict: Event dictionary to render.

    Returns:
        str: The console line.
    """
    tag = event_dict.pop("tag", None) or "INFO"
    message = event_dict.pop("message", "")
    indent = event_dict.pop("indent", 0)
    exception = event_dict.pop("exception", None)
    for key in _CONSOLE_DROPPED_KEYS:
        event_dict.pop(key, None)

    line = f"{'  ' * indent}[{tag}] {message}"
    if event_dict:
        extras = " ".join(f"{key}={value}" for key, value in event_dict.items())
        line = f"{line} {extras}"
    if exception:
        line = f"{line}\n{exception}"
    return line


def configure_logging(settings: Any | None = None) -> None:
    """Configure structured logging for the setup run.

    Sets up structlog with tagged console lines by default and JSON
    output when ``log_format`` is ``json``.

    Args:
        settings: Optional settings instance. If not provided, will load from environment.
    """
    if settings is None:
        settings = get_settings()

    level = getattr(logging, settings.log_level)

    # Shared processors for all logging
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        add_default_tag,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        rename_message_field,
    ]

    if settings.log_format == "console":
        renderer: Processor = render_tagged_line
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )

    # Configure standard logging for third-party libraries (httpx)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=max(level, logging.WARNING),
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    The name travels in the event context as ``logger``.

    Args:
        name: Optional logger name. If not provided, uses 'arbantv_setup'.

    Returns:
        BoundLogger: Configured structured logger instance.
    """
    return structlog.get_logger(logger=name or "arbantv_setup")

