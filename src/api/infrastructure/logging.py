"""Structlog configuration for the application.

Colored console output for development, JSON lines for deployments. Probes
are the only callers of the configured loggers.
"""

import logging
import os
import sys

import structlog


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    try:
        return logging.getLevelNamesMapping()[level.upper()]
    except KeyError:
        raise ValueError(f"Unknown log level: {level}") from None


def configure_logging(
    level: str | int = logging.INFO,
    service_name: str | None = None,
) -> None:
    """Configure structlog processors, renderer and minimum level.

    Colors are used when FORCE_COLOR is set or stdout is a TTY.

    Args:
        level: Minimum level to emit, as a level name or number
        service_name: Bound as ``service`` on every event when given

    Raises:
        ValueError: If ``level`` is not a known level name
    """
    min_level = _resolve_level(level)

    # FORCE_COLOR=1 enables colors even in non-TTY environments (like Docker)
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if force_color or sys.stdout.isatty():
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.extend(
            [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.clear_contextvars()
    if service_name:
        structlog.contextvars.bind_contextvars(service=service_name)
