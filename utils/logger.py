"""
Logging configuration for the application.
"""
import logging
import os
import sys
import time
from contextlib import contextmanager
from typing import Iterator


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name when writing to a terminal."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, fmt: str, datefmt: str, use_color: bool = True):
        super().__init__(fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with colors."""
        if not self.use_color:
            return super().format(record)
        original = record.levelname
        color = self.COLORS.get(original, self.RESET)
        record.levelname = f"{color}{original}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def setup_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Set up a logger.

    Args:
        name: Logger name
        level: Logging level

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    formatter = ColoredFormatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        use_color=sys.stdout.isatty()
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)
    return logger


@contextmanager
def log_duration(label: str) -> Iterator[None]:
    """Log how long the wrapped block took, in milliseconds."""
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        app_logger.info(f"{label} took {elapsed_ms:.0f}ms")


app_logger = setup_logger(
    "tweet_improver",
    getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
)
