from __future__ import annotations

import logging
import sys

"""Logging for the export: one stdout handler, labeled lines.

Output format is "<LABEL> <message>", where LABEL is the level name except
that WARNING prints as WARN and the custom SUMMARY level (25) prints as
SUMMARY. Module loggers (logging.getLogger(__name__)) are children of
"nook_data" and reach stdout through its handler.
"""

__all__ = [
    "APP_LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "setup_logging",
    "get_logger",
    "log_summary",
    "reset_logging",
]

APP_LOGGER_NAME = "nook_data"

SUMMARY_LEVEL = 25  # INFO と WARNING の間

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """"<LABEL> <message>" with WARN/SUMMARY relabeling."""

    RELABEL = {
        logging.WARNING: "WARN",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        label = self.RELABEL.get(record.levelno, record.levelname)
        return f"{label} {record.getMessage()}"


def _attach_stdout_handler(logger: logging.Logger) -> None:
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    # root には流さない (二重出力防止)
    logger.propagate = False


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure the "nook_data" logger at the given level and return it.

    The stdout handler is attached on the first call only; later calls just
    change the level, so the CLI can pass logging.DEBUG for --debug.
    """
    global _logger

    if _logger is None:
        logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
        _logger = logging.getLogger(APP_LOGGER_NAME)
        _attach_stdout_handler(_logger)

    _logger.setLevel(level)
    for handler in _logger.handlers:
        handler.setLevel(level)
    return _logger


def get_logger() -> logging.Logger:
    """The configured application logger (configured at INFO on first use)."""
    return _logger if _logger is not None else setup_logging()


def log_summary(message: str) -> None:
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Detach the handler and forget the configuration (tests)."""
    global _logger
    if _logger is not None:
        for handler in _logger.handlers[:]:
            _logger.removeHandler(handler)
        _logger.propagate = True
    _logger = None
