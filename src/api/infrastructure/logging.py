"""Structlog configuration for the application.

Probe events are rendered for humans on a terminal and as JSON lines
everywhere else, so alerts can match on event names such as
``media_orphaned_blob``.
"""

import logging
import os
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger


def service_stamper(service: str, version: str) -> Processor:
    """Build a processor that tags every event with the service and version."""

    def stamp(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", service)
        event_dict.setdefault("version", version)
        return event_dict

    return stamp


def wants_colors() -> bool:
    """Colored console output on a TTY, or when FORCE_COLOR is set (Docker)."""
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    return force_color or sys.stdout.isatty()


def configure_logging(
    level: int | str = logging.INFO,
    *,
    service: str = "chrononagram-api",
    version: str = "unknown",
) -> None:
    """Configure structlog once at startup.

    Args:
        level: Minimum level, as a ``logging`` constant or a name like "DEBUG".
        service: Value of the ``service`` key on JSON events.
        version: Value of the ``version`` key on JSON events.
    """
    if isinstance(level, str):
        level = logging.getLevelNamesMapping()[level.upper()]

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    if wants_colors():
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors += [
            service_stamper(service, version),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
