import sys

from loguru import logger


def setup_logging(level: str = "INFO") -> None:
    """Configure Loguru once, replacing the default handler."""
    logger.remove()  # remove default handler(s) to avoid duplicates
    logger.add(
        sys.stderr,
        level=level.upper(),
        format="<green>{time:HH:mm:ss.SSS}</green> | "
               "<level>{level: <8}</level> | "
               "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
               "<level>{message}</level>",
        backtrace=False,
        diagnose=False,
    )
