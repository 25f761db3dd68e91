"""Logging utilities for biostarpy modules."""

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger that inherits its handlers from the root logger.

    Works with ``basicConfig()`` without an explicit ``setup_logging()`` call.
    The logger propagates to root, and gets a WARNING level only when the
    root logger has no handlers yet.

    Args:
        name: Logger name (e.g. 'biostarpy.api')

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True

    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logger.setLevel(logging.WARNING)

    return logger
