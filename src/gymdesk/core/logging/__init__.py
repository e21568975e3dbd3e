"""Structured logging setup."""

import logging

import structlog

from gymdesk.config import Settings, settings


def configure_logging(config: Settings | None = None) -> None:
    """Configure structlog for the process.

    Console rendering in development, JSON lines when ``use_json_logs``
    is set (the production default).
    """
    config = config or settings

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            (
                structlog.processors.JSONRenderer()
                if config.use_json_logs
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(config.log_level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


__all__ = [
    "configure_logging",
]
