"""
Logging Configuration - Rice Inspection Grading API
app/logging_config.py

Routes stdlib logging and structlog through one pipeline.
Call ``configure_logging()`` once at startup; repeated calls are no-ops.
"""

import logging
import sys

import structlog

from app.config import settings

_configured = False


def configure_logging(level: str = None, log_format: str = None) -> None:
    """Configure structlog + stdlib logging from settings (idempotent)."""
    global _configured
    if _configured:
        return

    level_name = level or settings.LOG_LEVEL
    log_level = getattr(logging, level_name.upper(), logging.INFO)
    fmt = log_format or settings.LOG_FORMAT

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    if fmt == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)

    # Snowflake connector is chatty at INFO
    logging.getLogger("snowflake.connector").setLevel(logging.WARNING)

    _configured = True
