"""Logging setup for the Rasman Music API.

Events are emitted through structlog: human-readable colored lines on a
terminal, one JSON object per line everywhere else. The standard library
loggers used by uvicorn and pymongo share the same threshold.
"""

import logging
import os
import sys

import structlog

# pymongo logs topology heartbeats at DEBUG; they drown out request logs.
NOISY_LOGGERS = ("pymongo",)


def _use_colors() -> bool:
    # FORCE_COLOR lets containers without a TTY keep colored output.
    if os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes"):
        return True
    return sys.stdout.isatty()


def configure_logging(debug: bool = False) -> None:
    """Install the structlog pipeline for the whole process.

    Args:
        debug: Emit debug-level events such as joined connection attempts.
    """
    level = logging.DEBUG if debug else logging.INFO

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if _use_colors():
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(level=level, stream=sys.stdout, format="%(message)s")
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))
