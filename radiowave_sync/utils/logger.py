"""Logger utility for console and file logging."""

import logging
import sys
from pathlib import Path


DEFAULT_LOGGER_NAME = "radiowave_sync"


class _MaxLevelFilter(logging.Filter):
    """Pass only records below the given level."""

    def __init__(self, level: int):
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def _add_console_handlers(logger: logging.Logger, formatter: logging.Formatter) -> None:
    # INFO to stdout, warnings and errors to stderr
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(logging.INFO)
    stdout_handler.addFilter(_MaxLevelFilter(logging.WARNING))
    stdout_handler.setFormatter(formatter)
    logger.addHandler(stdout_handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(formatter)
    logger.addHandler(stderr_handler)


def setup_logger(name: str = DEFAULT_LOGGER_NAME, log_file: str = None) -> logging.Logger:
    """
    Set up a logger with console and optional file output.

    Args:
        name: Logger name
        log_file: Optional path to log file. If None, logs to console only.

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    has_file = any(isinstance(h, logging.FileHandler) for h in logger.handlers)
    logger.setLevel(logging.DEBUG if log_file or has_file else logging.INFO)

    if not logger.handlers:
        _add_console_handlers(logger, logging.Formatter('%(message)s'))

    if log_file and not has_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """
    Get or create a logger instance with console output.

    Args:
        name: Logger name

    Returns:
        Logger instance with console handlers
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(logging.INFO)
        _add_console_handlers(logger, logging.Formatter('%(message)s'))

    return logger
