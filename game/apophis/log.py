"""Logging setup shared by the core and the front-end."""

import logging
from typing import Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ROOT_LOGGER = "game.apophis"


def setup_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Attach a single stream handler to the package logger"""
    logger = logging.getLogger(ROOT_LOGGER)
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
