"""
Logging setup for reservoir watch.

Log records go to stderr for the operator and, in more detail, to a log
file (``LOG_FILE``) for later inspection. Feed workers run on their own
threads, so the file format carries the thread name.
"""

import logging
import os
import sys
import time
from pathlib import Path
from typing import IO, Optional

DEFAULT_LOG_FILE = "logs/reservoir_watch.log"

CONSOLE_FORMAT = "%(asctime)s %(levelname)-8s %(message)s"
FILE_FORMAT = (
    "%(asctime)s [%(threadName)s] %(name)s %(levelname)s "
    "%(module)s:%(lineno)d %(message)s"
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(log_level: str) -> int:
    level = logging.getLevelName(log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logger(
    name: str = "reservoir_watch",
    log_file: Optional[str] = None,
    log_level: str = "INFO",
    stream: Optional[IO[str]] = None
) -> logging.Logger:
    """
    Configure the application logger.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        name: Logger name
        log_file: Log file path; falls back to LOG_FILE, then logs/reservoir_watch.log
        log_level: Threshold for the logger and its console handler
        stream: Console stream (stderr by default)

    Returns:
        The configured logger
    """
    path = Path(log_file or os.getenv("LOG_FILE") or DEFAULT_LOG_FILE)
    path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    level = _resolve_level(log_level)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(stream or sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT, DATE_FORMAT))
    logger.addHandler(console)

    # The file keeps debug detail (dropped-record counts) whatever the console level
    file_handler = logging.FileHandler(path, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
    logger.addHandler(file_handler)

    logger.propagate = False
    return logger


class LoggerContext:
    """
    Time a block of work and log how it ended.

    Exceptions are logged with their traceback and then propagate.
    """

    def __init__(self, logger: logging.Logger, operation: str):
        self.logger = logger
        self.operation = operation
        self.elapsed: Optional[float] = None
        self._started = 0.0

    def __enter__(self) -> "LoggerContext":
        self._started = time.perf_counter()
        self.logger.info("Starting %s", self.operation)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.elapsed = time.perf_counter() - self._started
        if exc_type is None:
            self.logger.info("Completed %s in %.2fs", self.operation, self.elapsed)
        else:
            self.logger.error(
                "%s failed after %.2fs: %s", self.operation, self.elapsed, exc_val,
                exc_info=(exc_type, exc_val, exc_tb)
            )
        return False
