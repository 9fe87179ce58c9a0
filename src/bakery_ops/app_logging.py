"""Logging configuration helpers."""

import logging

LOGGER_NAME = "bakery_ops"


def configure_logging(level: int = logging.INFO) -> None:
    """Attach a single stream handler to the application logger."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
