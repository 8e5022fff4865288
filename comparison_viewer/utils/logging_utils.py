"""
Logging setup for the comparison viewer package.
"""

import logging
from typing import Union

PACKAGE_LOGGER = 'comparison_viewer'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: Union[str, int] = 'INFO') -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Calling it again only updates the level.

    Args:
        level: Logging level name or number

    Returns:
        The package logger

    Raises:
        ValueError: If the level name is unknown
    """
    if isinstance(level, str):
        numeric_level = logging.getLevelName(level.upper())
        if not isinstance(numeric_level, int):
            raise ValueError(f"Unknown logging level: {level}")
        level = numeric_level

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    if not any(h.get_name() == PACKAGE_LOGGER for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.set_name(PACKAGE_LOGGER)
        logger.addHandler(handler)

    return logger
