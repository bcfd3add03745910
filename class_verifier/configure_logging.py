"""Console logging setup for the command-line tool."""

import logging

LOG_FORMAT = "%(levelname)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a single console handler to the package logger."""
    logger = logging.getLogger("class_verifier")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger
