import sys

from loguru import logger

PRETTY_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def configure_pretty_logging(level: str = "DEBUG") -> None:
    logger.remove()
    logger.add(sys.stderr, format=PRETTY_FORMAT, level=level.upper(), colorize=True)
