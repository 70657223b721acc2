"""
Logging for imagehost.

Every component logs under the ``imagehost`` logger so one call to
setup_logging() routes the whole service, uploads and access refusals
included, to stdout and the optional LOG_FILE.
"""

import logging
import sys

import config

ROOT_LOGGER_NAME = 'imagehost'


def setup_logging(level: str = None, log_file: str = None) -> logging.Logger:
    """
    Configure the ``imagehost`` logger. Safe to call again when the app is
    recreated; earlier handlers are replaced.

    Args:
        level: Log level name, defaults to config.LOG_LEVEL
        log_file: Extra file to log to, defaults to config.LOG_FILE
    """
    level = level or config.LOG_LEVEL
    log_file = log_file if log_file is not None else config.LOG_FILE
    formatter = logging.Formatter(config.LOG_FORMAT)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """
    Logger for one component, e.g. get_logger('Ingest') logs as
    ``imagehost.Ingest``.
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
