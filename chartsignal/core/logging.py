import sys
from loguru import logger


def setup_logging(level: str = "INFO") -> None:
    """Replace loguru's default sink with a formatted stdout sink."""
    logger.remove()
    logger.add(
        sys.stdout,
        level=level.upper(),
        format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
               "<level>{level: <8}</level> | "
               "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        backtrace=True,
    )
    logger.debug("Logging initialized at {}", level.upper())
