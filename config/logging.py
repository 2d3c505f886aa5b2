"""
Structured logging setup.

Configures structlog on top of the standard library logging module so
that service modules can use ``structlog.get_logger(__name__)`` and emit
key/value events.
"""

import logging
import sys

import structlog
from structlog.contextvars import merge_contextvars


def configure_logging(*, level: str = 'INFO', json_logs: bool = False) -> None:
    """Configure structlog and the root stdlib logger."""
    processors = [
        merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format='%(message)s',
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    # Per-query SQL logging is too noisy outside of local debugging
    logging.getLogger('django.db.backends').setLevel(logging.WARNING)
