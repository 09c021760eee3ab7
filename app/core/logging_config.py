"""
Logging setup for the API process.
Application loggers follow LOG_LEVEL; SQL echo is left to the engine (`debug`) and
uvicorn's own access log is muted because the access-log middleware already records each request.
"""

import logging
import logging.config

from app.config import Settings, get_settings

_configured = False


def logging_dict(settings: Settings) -> dict:
    level = settings.log_level.upper()
    if not isinstance(logging.getLevelName(level), int):
        level = "INFO"
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {"format": "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"},
        },
        "handlers": {
            "console": {"class": "logging.StreamHandler", "formatter": "plain"},
        },
        "root": {"level": level, "handlers": ["console"]},
        "loggers": {
            "uvicorn.access": {"level": "WARNING"},
            "sqlalchemy.engine": {"level": "INFO" if settings.debug else "WARNING"},
        },
    }


def configure_logging(settings: Settings | None = None, *, force: bool = False) -> None:
    global _configured
    if _configured and not force:
        return
    logging.config.dictConfig(logging_dict(settings or get_settings()))
    _configured = True
