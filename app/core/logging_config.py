from __future__ import annotations

import logging
from logging.config import dictConfig

from app.core.config import Settings

PLAIN_FORMAT = "%(levelname)s %(asctime)s %(name)s %(message)s"
JSON_FORMAT = (
    '{"level":"%(levelname)s","time":"%(asctime)s","logger":"%(name)s","message":"%(message)s"}'
)

# Chatty third-party loggers kept at WARNING unless the root level is stricter.
QUIET_LOGGERS = ("httpx", "httpcore", "openai")


def configure_logging(settings: Settings) -> None:
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": JSON_FORMAT if settings.log_json else PLAIN_FORMAT,
                }
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                }
            },
            "root": {
                "level": settings.log_level,
                "handlers": ["default"],
            },
            "loggers": {
                "sqlalchemy.engine": {
                    "level": "INFO" if settings.log_sql else "WARNING",
                },
            },
        }
    )

    logging.getLogger("uvicorn.error").setLevel(settings.log_level)
    root_level = logging.getLogger().getEffectiveLevel()
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, root_level))
