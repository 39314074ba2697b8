"""
Logger factory shared by the GoalCast modules, CLIs and API.

Format and level come from ``goalcast.config``; the level can be overridden
with the ``GOALCAST_LOG_LEVEL`` environment variable.
"""

import logging
from typing import Optional

from goalcast.config import LOG_FORMAT, LOG_LEVEL

PACKAGE_LOGGER = "goalcast"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Return the logger for ``name`` (the package logger when None).

    The first call installs a stdout handler on the root logger unless the
    host application (pytest, uvicorn, ...) already configured one.
    """
    if not logging.getLogger().handlers:
        logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

    return logging.getLogger(name if name is not None else PACKAGE_LOGGER)
