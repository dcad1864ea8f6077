"""Utilities related to logging."""

import logging
from logging.config import dictConfig
from typing import Optional

from pythonjsonlogger import jsonlogger

from .base import BaseSettings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_FORMAT_JSON = "%(asctime)s %(levelname)s %(name)s %(pathname)s:%(lineno)d %(message)s"


def default_logging_config(log_level: str = "WARNING", json_format: bool = False):
    """Build the dictConfig mapping used when no custom configuration is given."""
    if json_format:
        formatter = {"()": jsonlogger.JsonFormatter, "fmt": LOG_FORMAT_JSON}
    else:
        formatter = {"format": LOG_FORMAT}
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": formatter},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stderr",
            }
        },
        "root": {"level": log_level.upper(), "handlers": ["console"]},
    }


class LoggingConfigurator:
    """Utility class used to configure logging for applications using the resolver."""

    @classmethod
    def configure(
        cls,
        log_level: Optional[str] = None,
        log_file: Optional[str] = None,
        json_format: bool = False,
    ):
        """Configure the root logger.

        :param log_level: str: (Default value = None) Root log level name

        :param log_file: str: (Default value = None) Optional file name to write logs to

        :param json_format: bool: (Default value = False) Emit JSON log records
        """
        dictConfig(default_logging_config(log_level or "WARNING", json_format))

        if log_file:
            handler = logging.FileHandler(log_file, encoding="utf-8")
            handler.setFormatter(
                jsonlogger.JsonFormatter(LOG_FORMAT_JSON)
                if json_format
                else logging.Formatter(LOG_FORMAT)
            )
            logging.root.addHandler(handler)

    @classmethod
    def configure_from_settings(cls, settings: BaseSettings):
        """Configure logging from the `log.*` settings."""
        cls.configure(
            log_level=settings.get_str("log.level"),
            log_file=settings.get_str("log.file"),
            json_format=bool(settings.get_bool("log.json", default=False)),
        )
