"""Logging setup, applied once at application start."""

import logging.config

from guardmap.config import Settings


def build_logging_config(settings: Settings) -> dict:
    level = settings.log_level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s [%(process)d] [%(levelname)s] in %(module)s: %(message)s",
                "datefmt": "[%Y-%m-%d %H:%M:%S %z]",
                "class": "logging.Formatter",
            },
        },
        "handlers": {
            "stream": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
                "formatter": "default",
            },
        },
        "loggers": {
            # SQL echo is controlled by the engine, keep the logger quiet otherwise
            "sqlalchemy.engine": {"level": "INFO" if settings.debug else "WARNING"},
            "alembic": {"level": level},
        },
        "root": {"handlers": ["stream"], "level": level},
    }


def configure_logging(settings: Settings) -> None:
    logging.config.dictConfig(build_logging_config(settings))
