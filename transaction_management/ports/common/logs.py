import logging
import sys
from typing import Optional, TextIO

APP_NAME = "transaction_management"
DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s'

logger = logging.getLogger(APP_NAME)


def setup_logging(level: int = logging.WARNING,
                  format_string: str = DEFAULT_FORMAT,
                  stream: Optional[TextIO] = None) -> None:
    """
    Replaces the handlers of the application logger with a single stream handler.

    Args:
        level: level of the logger and of its handler
        format_string: record format
        stream: output of the handler, stderr by default
    """
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(format_string))
    logger.addHandler(handler)
    set_log_level(level)

    # records never reach the root logger, uvicorn configures it on its own
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    return logger.getChild(name)


def set_log_level(level: int | str) -> None:
    """ Accepts a level number or a level name in any case, e.g. "debug" from the settings """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


setup_logging()
