"""Logging setup for regdesk: INFO to stdout, WARNING and above to stderr"""

import logging
import sys

from regdesk.config import config

LOG_FORMAT = "%(asctime)s %(levelname)s:%(name)s:%(message)s"

# Libraries whose INFO output drowns out request handling logs
QUIET_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "multipart": logging.WARNING,
    "fontTools": logging.WARNING,
}


class BelowWarningFilter(logging.Filter):
    def filter(self, record):
        return record.levelno < logging.WARNING


def _stream_handler(stream, level, formatter, only_below_warning=False):
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    if only_below_warning:
        handler.addFilter(BelowWarningFilter())
    return handler


def setup_logging(log_level: str | None = None):
    """
    Route application logs by severity and apply the configured level.

    Args:
        log_level: Level name overriding LOG_LEVEL from config
    """
    level_name = (log_level or config.get("log_level") or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(
        _stream_handler(sys.stdout, logging.DEBUG, formatter, only_below_warning=True)
    )
    root_logger.addHandler(_stream_handler(sys.stderr, logging.WARNING, formatter))

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(max(quiet_level, level))


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, usually called with __name__"""
    return logging.getLogger(name)
