"""Logging setup for the Course Planner.

All loggers live under the ``course_planner`` namespace. The console handler
writes to stderr so plan JSON printed on stdout stays machine-readable; an
optional rotating file handler can emit plain text or one JSON object per line.
"""

import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .config import LoggingConfig

ROOT_LOGGER_NAME = 'course_planner'

CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s:%(lineno)d | %(message)s"

# Record attributes copied into JSON output when present
EXTRA_FIELDS = ('file_name', 'exit_code', 'path', 'details')


class JsonFormatter(logging.Formatter):
    """One JSON object per record, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'line': record.lineno,
            'thread': record.threadName,
        }
        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        for name in EXTRA_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """Colors the level name when stderr is a terminal."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[41m',  # Red background
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        if not (hasattr(sys.stderr, 'isatty') and sys.stderr.isatty()):
            return super().format(record)
        # Work on a copy; other handlers see the same record
        colored = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(colored.levelname, '')
        colored.levelname = f"{color}{colored.levelname}{self.RESET}"
        return super().format(colored)


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, datefmt='%H:%M:%S'))
    return handler


def _file_handler(log_file: str, max_bytes: int, backup_count: int,
                  json_format: bool) -> logging.Handler:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(JsonFormatter() if json_format else logging.Formatter(FILE_FORMAT))
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
    console: bool = True,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> logging.Logger:
    """Configure the ``course_planner`` logger tree.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Rotating log file path; its directory is created if needed
        json_format: Write the log file as JSON lines
        console: Log to stderr
        max_bytes: Max size per log file before rotation
        backup_count: Number of rotated files to keep

    Returns:
        The package root logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Calling again replaces handlers instead of duplicating output
    logger.handlers.clear()

    if console:
        logger.addHandler(_console_handler())
    if log_file:
        logger.addHandler(_file_handler(log_file, max_bytes, backup_count, json_format))

    logger.propagate = False
    return logger


def setup_logging_from_config(
    config: 'LoggingConfig',
    verbose: bool = False,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """setup_logging() driven by the ``logging`` config section.

    ``verbose`` forces DEBUG; ``log_file`` overrides the configured file.
    """
    return setup_logging(
        level="DEBUG" if verbose else config.level,
        log_file=log_file or config.file,
        json_format=config.json_format,
        console=True,
        max_bytes=config.max_bytes,
        backup_count=config.backup_count,
    )


def get_logger(name: str) -> logging.Logger:
    """Child logger, e.g. get_logger('matcher') -> 'course_planner.matcher'."""
    return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')


def log_exception(logger: logging.Logger, exc: Exception,
                  message: str = "An error occurred",
                  level: int = logging.ERROR) -> None:
    """Log an exception with its traceback and structured attributes.

    ``file_name``, ``exit_code``, ``path`` and ``details`` are copied from the
    exception onto the record so the JSON formatter can emit them.
    """
    extra = {
        name: getattr(exc, name)
        for name in EXTRA_FIELDS
        if getattr(exc, name, None) is not None
    }
    logger.log(level, f"{message}: {exc}", exc_info=True, extra=extra)
