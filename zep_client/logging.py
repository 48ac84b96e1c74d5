import logging
import sys

import structlog

from zep_client.config import settings


_configured = False


def configure_logging(level: str | None = None):
    """Configure structured logging for command-line use.

    The library itself never calls this; applications embedding the client
    keep control of their own logging setup.

    NOTE:
        Handlers are bound to ``sys.__stderr__`` instead of ``sys.stderr``.
        Click's ``CliRunner`` temporarily replaces and then closes
        ``sys.stderr``; a handler bound to that stream raises
        ``ValueError: I/O operation on closed file`` on later writes.
    """
    global _configured
    if _configured:
        return

    level_name = (level or settings.log_level).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    handler = logging.StreamHandler(sys.__stderr__)
    handler.setLevel(log_level)
    logging.basicConfig(level=log_level, handlers=[handler], format="%(message)s")

    # Request lines from httpx duplicate what the caller already logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger instance.

    Args:
        name: Optional name for the logger (usually __name__)

    Returns:
        A configured logger instance
    """
    return structlog.get_logger(name)
