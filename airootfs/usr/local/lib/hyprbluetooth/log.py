"""HyprBluetooth - Logging setup.

The terminal is owned by the full-screen view, so records never go to
stderr.  They are written to a file when one is configured, otherwise
they are forwarded to the textual devtools console.
"""

import logging
from typing import Optional

from textual.logging import TextualHandler


LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s %(message)s"
TIME_FORMAT = "%H:%M:%S"

PACKAGE_LOGGER = "hyprbluetooth"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """Configure the package logger and return it.

    Args:
        level: Logging level name, e.g. 'DEBUG'.
        log_file: Optional path of a file to append records to.

    Returns:
        The configured ``hyprbluetooth`` logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = TextualHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=TIME_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
