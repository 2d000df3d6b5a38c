"""Structured logging helpers.

The host application configures structlog; modules here only obtain
loggers and emit key/value events.
"""

import structlog


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        structlog logger bound to the host's configuration
    """
    return structlog.get_logger(name)  # type: ignore[no-any-return]
