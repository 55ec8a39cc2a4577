"""Logger configuration for archive-tracks."""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{thread.name}</cyan> | <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {thread.name} | {name}:{function}:{line} - {message}"


def setup_logger(level: str = "INFO", log_file: Path | None = None) -> None:
    """Route loguru output to stderr and, optionally, a rotating log file.

    Worker threads decode activities concurrently, so both sinks carry the
    thread name and the file sink is enqueued.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path of a log file kept alongside console output
    """
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=FILE_FORMAT,
            level=level,
            rotation="10 MB",
            retention=5,
            enqueue=True,
            encoding="utf-8",
        )

    logger.debug(f"Logger initialized with level={level}, log_file={log_file}")
