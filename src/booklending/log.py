"""Loguru setup for the CLI and embedding applications."""

import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - "
    "<level>{message}</level>"
)


def configure_logging(level: str = "WARNING", sink=None) -> int:
    """Replace loguru's default handler with a single configured sink.

    Args:
        level: Minimum level to emit
        sink: Destination, defaults to stderr

    Returns:
        The loguru handler id
    """
    logger.remove()
    return logger.add(
        sink=sink or sys.stderr,
        level=level.upper(),
        format=LOG_FORMAT,
        colorize=sink is None,
    )
