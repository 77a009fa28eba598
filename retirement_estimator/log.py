"""Logging setup for the HTTP service. The projection engine itself never logs."""

import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO") -> None:
    logger.remove()  # Remove default handler
    logger.add(sys.stderr, format=LOG_FORMAT, level=level.upper(), colorize=True)
