"""Logger setup shared by the CLI and library entry points"""

import logging
import sys


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(name: str = "blogindex", level: int | str = logging.INFO) -> logging.Logger:
    """Configure and return the named logger with a single stderr handler.

    Repeated calls replace the handler, so it always writes to the current
    sys.stderr and output is never duplicated.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
