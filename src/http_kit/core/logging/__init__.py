"""
Logging for http-kit.

Модули пакета пишут в стандартные логгеры ``logging.getLogger(__name__)``
под корнем "http_kit". По умолчанию к корню подключен только NullHandler;
configure_logging() добавляет консольный handler с нужным форматом.

Example:
    >>> from http_kit.core.logging import LoggingConfig, configure_logging
    >>> configure_logging(LoggingConfig.create(level="DEBUG", format="json"))
"""

import logging
import sys
from typing import Any, Dict

from .config import LoggingConfig, LogLevel, LogFormat
from .formatters import JSONFormatter, TextFormatter, get_formatter

ROOT_LOGGER_NAME = "http_kit"

# маркер handler'ов, созданных configure_logging (чтобы заменять их, а не копить)
_HANDLER_ATTR = "_http_kit_handler"


class ExtraFieldsFilter(logging.Filter):
    """Добавить постоянные поля в каждую запись."""

    def __init__(self, extra_fields: Dict[str, Any]):
        super().__init__()
        self.extra_fields = dict(extra_fields)

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in self.extra_fields.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


def configure_logging(config: LoggingConfig) -> logging.Logger:
    """
    Configure the "http_kit" logger.

    Replaces handlers previously installed by this function; handlers added
    by the application are left untouched.

    Returns:
        Configured logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, config.level.value))

    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_ATTR, False):
            logger.removeHandler(handler)
            handler.close()

    if config.enable_console:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(getattr(logging, config.level.value))
        handler.setFormatter(get_formatter(config.format.value))
        if config.extra_fields:
            handler.addFilter(ExtraFieldsFilter(config.extra_fields))
        setattr(handler, _HANDLER_ATTR, True)
        logger.addHandler(handler)

    return logger


__all__ = [
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    "JSONFormatter",
    "TextFormatter",
    "get_formatter",
    "ExtraFieldsFilter",
    "configure_logging",
    "ROOT_LOGGER_NAME",
]
