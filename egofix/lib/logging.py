"""
Structured logging configuration for EgoFix Diagnostics.

Configures structlog to work alongside stdlib logging so that both
`logging.getLogger()` and `structlog.get_logger()` produce consistent,
structured output: JSON in production, human-readable in dev.

Usage:
    from egofix.lib.logging import setup_logging

    setup_logging()  # Call once at host application startup
"""

import logging
import os
import sys

import structlog


def setup_logging(level: str | None = None) -> None:
    """
    Configure structlog and stdlib logging for the diagnostics core.

    In development (EGOFIX_DEV_MODE=1): colored console output.
    Otherwise: JSON-formatted structured logs.

    Args:
        level: Optional log level override; defaults to LOG_LEVEL or INFO.
    """
    dev_mode = os.environ.get("EGOFIX_DEV_MODE") == "1"
    log_level = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if dev_mode:
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # stdlib records emitted via logging.getLogger(__name__) get the same rendering
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level, logging.INFO))

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
