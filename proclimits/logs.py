"""structlog setup for proclimits."""

import logging
import sys

import structlog
from structlog.types import Processor

from proclimits.config.models import LoggingConfig


def configure_logging(config: LoggingConfig) -> None:
    """Configure structlog rendering, level and output stream.

    Args:
        config: Logging section of the loaded configuration.
    """
    level = getattr(logging, config.level, logging.WARNING)
    stream = sys.stdout if config.output == "stdout" else sys.stderr

    if config.format == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )
