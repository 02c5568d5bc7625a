"""Application logging: one stderr handler on the `fieldtrack` logger."""

import logging
import sys
from typing import Optional

LOGGER_NAME = "fieldtrack"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logger(level: int = logging.INFO) -> logging.Logger:
    """Attach the stderr handler once; later calls only adjust the level."""
    log = logging.getLogger(LOGGER_NAME)
    log.setLevel(level)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        log.addHandler(handler)
    return log


def get_logger(module: Optional[str] = None) -> logging.Logger:
    """Return the application logger, or a child of it for `module`."""
    if module:
        return logging.getLogger(f"{LOGGER_NAME}.{module}")
    return logging.getLogger(LOGGER_NAME)
