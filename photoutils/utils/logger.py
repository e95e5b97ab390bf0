"""
Logging Configuration and Utilities

All diagnostics go through the "photoutils" logger hierarchy. The console
handler writes to stderr, with ANSI colors when the stream is a terminal or
JSON records when requested. A rotating log file can be added on top.

Author: photoutils Project
License: MIT
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from pythonjsonlogger import jsonlogger
from typing import Optional, TextIO


ROOT_LOGGER_NAME = "photoutils"

CONSOLE_FORMAT = '[%(asctime)s] %(levelname)s - %(name)s - %(message)s'
FILE_FORMAT = '[%(asctime)s] %(levelname)s - %(name)s - %(threadName)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s'
JSON_CONSOLE_FIELDS = '%(asctime)s %(name)s %(levelname)s %(message)s'
JSON_FILE_FIELDS = '%(asctime)s %(name)s %(levelname)s %(threadName)s %(module)s %(funcName)s %(lineno)d %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

LEVEL_COLORS = {
    'DEBUG': '\033[36m',      # Cyan
    'INFO': '\033[32m',       # Green
    'WARNING': '\033[33m',    # Yellow
    'ERROR': '\033[31m',      # Red
    'CRITICAL': '\033[35m',   # Magenta
}
RESET = '\033[0m'


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name."""

    def format(self, record):
        color = LEVEL_COLORS.get(record.levelname)
        if color is None:
            return super().format(record)

        # Other handlers share the record, so color a copy
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{RESET}"
        return super().format(record)


def _console_formatter(json_format: bool, colors: bool) -> logging.Formatter:
    if json_format:
        return jsonlogger.JsonFormatter(JSON_CONSOLE_FIELDS)
    if colors:
        return ColoredFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT)
    return logging.Formatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT)


def _file_formatter(json_format: bool) -> logging.Formatter:
    if json_format:
        return jsonlogger.JsonFormatter(JSON_FILE_FIELDS)
    return logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT)


def setup_logging(
    log_level: str = "WARNING",
    log_to_file: bool = False,
    log_file_path: str = "photoutils.log",
    log_rotation_size: int = 10485760,  # 10MB
    log_retention_count: int = 5,
    json_format: bool = False,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Configure the photoutils logger.

    Calling it again replaces the handlers installed by the previous call.
    Progress lines of the command line tools are written to stdout by an
    observer, not through logging, so the two never interleave.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: Also log to a rotating file
        log_file_path: Path to log file
        log_rotation_size: Max log file size before rotation (bytes)
        log_retention_count: Number of backup log files to keep
        json_format: Emit JSON records instead of text
        stream: Console stream (defaults to sys.stderr)

    Returns:
        The configured "photoutils" logger
    """
    level = getattr(logging, str(log_level).upper())
    stream = stream or sys.stderr

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(stream)
    console_handler.setLevel(level)
    colors = hasattr(stream, "isatty") and stream.isatty()
    console_handler.setFormatter(_console_formatter(json_format, colors))
    logger.addHandler(console_handler)

    if log_to_file:
        Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file_path,
            maxBytes=log_rotation_size,
            backupCount=log_retention_count,
            encoding='utf-8'
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(_file_formatter(json_format))
        logger.addHandler(file_handler)

    # Keep records away from handlers installed by embedding applications
    logger.propagate = False

    logger.debug(f"Logging initialized at {log_level} level")
    if log_to_file:
        logger.debug(f"File logging enabled: {log_file_path}")

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Logger for a module, placed under the photoutils hierarchy.

    Args:
        name: Logger name (typically __name__)
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
