"""
Logging Configuration
Installs the handlers of the ``linalgviz`` logger for the command-line
front-end. Library modules only create child loggers and never add handlers.
"""
import logging
import sys
from typing import Optional

LOGGER_NAME = "linalgviz"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def reset_logging() -> logging.Logger:
    """Close and detach every handler on the package logger."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    return logger


def _attach(logger: logging.Logger, handler: logging.Handler, level: int, formatter: logging.Formatter) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def setup_logging(level: int = logging.WARNING, log_file: Optional[str] = None) -> logging.Logger:
    """
    Route package logs to stderr and, optionally, to a file.

    Calling it again replaces the previous handlers, closing any log file
    they held open. Stdout is left to command output.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path; the file is truncated on every call.
    """
    logger = reset_logging()
    logger.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    _attach(logger, logging.StreamHandler(sys.stderr), level, formatter)
    if log_file:
        _attach(logger, logging.FileHandler(log_file, mode='w', encoding='utf-8'), level, formatter)

    logger.debug("Logging to stderr%s at %s", f" and {log_file}" if log_file else "", logging.getLevelName(level))
    return logger
