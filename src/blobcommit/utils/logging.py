from __future__ import annotations

import logging
from typing import Union

ROOT_LOGGER_NAME = "blobcommit"


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the 'blobcommit' hierarchy."""
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(level: Union[str, int], *, override: bool = False) -> None:
    """
    Apply a level to the root 'blobcommit' logger.

    Without ``override`` the level is only applied while the logger is still
    NOTSET, so a level chosen by the application wins. Handlers are left to
    the application.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if override or logger.level == logging.NOTSET:
        logger.setLevel(level)
