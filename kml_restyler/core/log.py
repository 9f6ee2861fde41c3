"""Logging setup shared by the library modules.

Library code only calls get_logger(). The CLI calls configure_logging()
once; without it nothing below WARNING is shown.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = '%(levelname)s %(name)s: %(message)s'
DEFAULT_LEVEL = logging.WARNING


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name)


def parse_level(value: str | int) -> int:
    """Accept 'debug', 'INFO', '10', or an int. Raise ValueError otherwise."""
    if isinstance(value, int):
        return value
    text = value.strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    if not isinstance(level, int):
        raise ValueError(f'Unknown log level: {value!r}')
    return level


def configure_logging(level: str | int = DEFAULT_LEVEL) -> None:
    """Send kml_restyler log records to stderr at the given level."""
    logger = logging.getLogger('kml_restyler')
    logger.setLevel(parse_level(level))
    # Re-point on every call; sys.stderr may have been swapped since the last one
    for old in list(logger.handlers):
        logger.removeHandler(old)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
