"""
core/logging.py

Centralized logging configuration for the application.
- Console output, coloured through `colorlog` when it is installed
- Rotating logs/app.log (1MB max, 5 backups)
- logs/error.log for ERROR and above
- Root level driven by LOG_LEVEL

Call `init_logging()` once while the app starts (see main.py).
"""

import logging
from logging.config import dictConfig

from app.core.config import BASE_DIR, settings

try:
    import colorlog  # noqa: F401

    COLORLOG_AVAILABLE = True
except ImportError:
    COLORLOG_AVAILABLE = False

LOG_DIR = BASE_DIR / "logs"
LOG_DIR.mkdir(parents=True, exist_ok=True)

LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] in %(module)s: %(message)s"

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {"format": LOG_FORMAT},
        "color": (
            {
                "()": "colorlog.ColoredFormatter",
                "format": f"%(log_color)s{LOG_FORMAT}",
                "log_colors": {
                    "DEBUG": "cyan",
                    "INFO": "green",
                    "WARNING": "yellow",
                    "ERROR": "red",
                    "CRITICAL": "bold_red",
                },
            }
            if COLORLOG_AVAILABLE
            else {"format": LOG_FORMAT}
        ),
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "color",
        },
        "file": {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": str(LOG_DIR / "app.log"),
            "maxBytes": 1 * 1024 * 1024,
            "backupCount": 5,
            "formatter": "default",
            "encoding": "utf-8",
        },
        "error_file": {
            "class": "logging.FileHandler",
            "filename": str(LOG_DIR / "error.log"),
            "level": "ERROR",
            "formatter": "default",
            "encoding": "utf-8",
        },
    },
    "loggers": {
        "uvicorn": {"level": "WARNING"},
        "sqlalchemy": {"level": "WARNING"},
        "passlib": {"level": "ERROR"},
        "botocore": {"level": "WARNING"},
    },
    "root": {
        "level": settings.LOG_LEVEL.upper(),
        "handlers": ["console", "file", "error_file"],
    },
}


def init_logging() -> None:
    """Applies LOGGING_CONFIG to the root logger."""
    dictConfig(LOGGING_CONFIG)
    logging.getLogger(__name__).debug("[LOGGING] Logging initialised")
