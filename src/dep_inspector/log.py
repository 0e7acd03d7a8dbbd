"""Structured logging configuration — structlog + stdlib logging."""

import logging
import logging.config
import os

import structlog


def setup_logging() -> None:
    """Configure structlog and stdlib logging.

    Reads from environment variables:
        DEP_INSPECTOR_LOG_LEVEL  — log level (default: WARNING)
        DEP_INSPECTOR_LOG_FORMAT — console | json (default: console)
        DEP_INSPECTOR_LOG_FILE   — write to this file instead of stderr
    """
    log_level = os.environ.get("DEP_INSPECTOR_LOG_LEVEL", "WARNING").upper()
    log_format = os.environ.get("DEP_INSPECTOR_LOG_FORMAT", "console").lower()
    log_file = os.environ.get("DEP_INSPECTOR_LOG_FILE")

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=not log_file)

    structlog.configure(
        processors=shared_processors
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if log_file:
        handler: dict = {
            "class": "logging.FileHandler",
            "filename": log_file,
            "formatter": "structlog",
        }
    else:
        handler = {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
            "formatter": "structlog",
        }

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
            "handlers": {"default": handler},
            "root": {
                "handlers": ["default"],
                "level": log_level,
            },
            "loggers": {
                "dep_inspector": {"level": log_level},
                "httpx": {"level": "WARNING"},
            },
        }
    )
