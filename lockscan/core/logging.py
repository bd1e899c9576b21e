"""Structured logging configuration — structlog + stdlib logging."""

from __future__ import annotations

import logging
import logging.config

import structlog

from lockscan.core.config import log_format, log_level


def setup_logging(level: str | None = None) -> None:
    """Configure structlog and stdlib logging.

    Reads from environment variables unless *level* is given:
        LOCKSCAN_LOG_LEVEL  — scanner log level (default: INFO)
        LOCKSCAN_LOG_FORMAT — console | json (default: console)

    Output goes to stderr so that ``--json`` scan output on stdout stays
    machine-readable.
    """
    resolved_level = (level or log_level()).upper()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format() == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    # --- structlog configure ---
    structlog.configure(
        processors=shared_processors
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # --- stdlib logging configure ---
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structlog": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": shared_processors,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        renderer,
                    ],
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "structlog",
                },
            },
            "root": {
                "handlers": ["default"],
                "level": resolved_level,
            },
            "loggers": {
                "lockscan": {"level": resolved_level},
            },
        }
    )
