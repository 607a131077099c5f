"""
Logging setup.
Routes all application logs through loguru with a single stderr sink.
"""
import sys
from loguru import logger


LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name} - {message}"


def configure_logging(level: str = "INFO") -> None:
    """Replace loguru's default sink with one at the configured level."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)
