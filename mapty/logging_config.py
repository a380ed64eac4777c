"""Central logging configuration for Mapty."""

from __future__ import annotations

from logging.config import dictConfig

_configured = False

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
VALID_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _default_config(level: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": LOG_FORMAT,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "level": level,
            },
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
    }


def normalize_log_level(value: str) -> str:
    upper = value.strip().upper()
    if upper not in VALID_LEVELS:
        raise ValueError(f"Log level must be one of {', '.join(VALID_LEVELS)}")
    return upper


def configure_logging(level: str = "INFO") -> None:
    """Configure application logging once per process."""

    global _configured
    if _configured:
        return

    dictConfig(_default_config(normalize_log_level(level)))
    _configured = True
