# aura/core/logging.py
"""
Logging setup, called once from main.py.
Modules only ever do `logger = logging.getLogger(__name__)`.
"""
import logging.config


def setup_logging(level: str = "INFO") -> None:
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            },
        },
        "loggers": {
            "aura": {"handlers": ["console"], "level": level.upper(), "propagate": False},
        },
        "root": {"handlers": ["console"], "level": "WARNING"},
    })
