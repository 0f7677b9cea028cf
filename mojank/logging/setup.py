"""Structlog configuration for mojank."""

import logging
import sys

import structlog
from structlog.typing import FilteringBoundLogger

from mojank.config import LogFormat, MojankConfig

# httpx logs every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")


def _renderer_chain(log_format: LogFormat) -> list:
    if log_format == LogFormat.JSON:
        return [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [
        structlog.dev.set_exc_info,
        structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
    ]


def configure_logging(config: MojankConfig | None = None) -> None:
    """
    Route mojank's structlog events to stderr.

    The library only emits events; call this once from the application
    entry point. Stdout is left alone so command output stays parseable.

    Args:
        config: MojankConfig instance, uses defaults if None
    """
    config = config or MojankConfig()
    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            *_renderer_chain(config.log_format),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> FilteringBoundLogger:
    """Get a structlog logger, bound to ``logger_name`` when given."""
    logger = structlog.get_logger()
    return logger.bind(logger_name=name) if name else logger
