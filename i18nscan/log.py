"""
Logging setup for the command line.

Library modules only create loggers; the CLI installs the handler.
"""

import logging
import sys

LOGGER_NAME = "i18nscan"
LOG_FORMAT = "%(levelname)s %(message)s"


def configure_logging(verbose: bool = False, stream=None) -> logging.Logger:
    """
    Route i18nscan log records to stderr.

    Args:
        verbose: DEBUG when True, INFO otherwise
        stream: Output stream (default: sys.stderr)
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
