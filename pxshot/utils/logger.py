import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, Union

from ..config import settings

PACKAGE_LOGGER = "pxshot"


class ColoredFormatter(logging.Formatter):
    """Custom formatter that adds colors to console output."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
        'RESET': '\033[0m'      # Reset
    }

    def format(self, record):
        """Format log record with colors for console output."""
        # Work on a copy so other handlers see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        record.levelname = f"{color}{record.levelname}{self.COLORS['RESET']}"
        return super().format(record)


class RequestContextFilter(logging.Filter):
    """Filter to add the API request id to log records."""

    def filter(self, record):
        """Default request_id for records logged outside an API call."""
        record.request_id = getattr(record, 'request_id', '-')
        return True


def _resolve_level(log_level: Optional[str]) -> int:
    if log_level is None:
        log_level = settings.log_level or ("DEBUG" if settings.debug else "INFO")
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")
    return level


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[Union[str, Path]] = None,
    enable_console: bool = True
) -> logging.Logger:
    """
    Configure the pxshot logger.

    Libraries should not configure logging on import, so this is opt-in:
    applications and the example scripts call it explicitly.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to PXSHOT_LOG_LEVEL, or DEBUG when PXSHOT_DEBUG is set.
        log_file: Optional path for a rotating log file
        enable_console: Whether to log to stderr

    Returns:
        Configured package logger
    """
    level = _resolve_level(log_level)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Clear existing handlers to avoid duplicates
    logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        fmt='%(asctime)s | %(levelname)-8s | %(name)s | '
            'req:%(request_id)s | %(filename)s:%(lineno)d | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    simple_formatter = ColoredFormatter(
        fmt='%(asctime)s | %(levelname)-8s | %(name)s | req:%(request_id)s | %(message)s',
        datefmt='%H:%M:%S'
    )

    context_filter = RequestContextFilter()

    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(simple_formatter)
        console_handler.addFilter(context_filter)
        logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # Rotating file handler (5MB max, keep 3 backups)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_path,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)
        file_handler.addFilter(context_filter)
        logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    logger.propagate = False

    logger.debug(f"Logging configured at {logging.getLevelName(level)}")
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the pxshot namespace.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    if name == PACKAGE_LOGGER or name.startswith(f"{PACKAGE_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


# Silent until the application opts in
logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())
