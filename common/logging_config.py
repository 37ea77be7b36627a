"""
Logging configuration for the tracker.

All modules obtain loggers through get_logger(), which places them under the
"tracker" namespace so one dictConfig call controls every component.
"""

import logging
import logging.config
import sys
from pathlib import Path
from typing import Any, Dict, Optional

ROOT_LOGGER = "tracker"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure console logging and, optionally, a rotating log file.

    Args:
        level: Logging level for the tracker loggers (DEBUG, INFO, WARNING, ERROR)
        log_file: Path of a log file; no file handler when omitted
    """
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(get_logging_config(level, log_file))

    logging.getLogger("requests").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_logging_config(level: str, log_file: Optional[str]) -> Dict[str, Any]:
    """Get logging configuration dictionary."""
    handlers: Dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "standard",
            "stream": sys.stderr,
        }
    }
    if log_file:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "DEBUG",
            "formatter": "detailed",
            "filename": log_file,
            "maxBytes": 1048576,  # 1MB
            "backupCount": 3,
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)8s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": "%(asctime)s [%(levelname)8s] %(name)s:%(lineno)d - %(funcName)s(): %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": handlers,
        "loggers": {
            ROOT_LOGGER: {
                "level": level,
                "handlers": list(handlers),
                "propagate": False,
            }
        },
    }


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance under the tracker namespace.

    Args:
        name: Logger name (typically __name__)
    """
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
