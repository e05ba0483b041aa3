"""Logging configuration setup.

The terminal belongs to Textual while the dashboard runs, so all log output
goes to a timestamped file under ``LOG_DIR``.
"""

from __future__ import annotations

import copy
import logging
import logging.config
import os
from datetime import datetime

from scoutdash.constants.defaults import LOG_DIR

logger = logging.getLogger(__name__)

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

BASE_LOG_CFG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple_file": {
            "format": "%(asctime)s - %(name)30s:%(lineno)-4d - %(levelname)-7s - %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "file_handler": {
            "class": "logging.FileHandler",
            "level": "DEBUG",
            "formatter": "simple_file",
            "filename": "scoutdash.log",
            "encoding": "utf-8",
        },
    },
    "loggers": {
        "scoutdash": {
            "handlers": ["file_handler"],
            "propagate": False,
            "level": "INFO",
        },
        "httpx": {
            "handlers": ["file_handler"],
            "propagate": False,
            "level": "WARNING",
        },
        "textual": {
            "handlers": ["file_handler"],
            "propagate": False,
            "level": "WARNING",
        },
    },
    "root": {
        "handlers": ["file_handler"],
        "level": "WARNING",
    },
}


def normalize_level(level: str) -> str:
    """Upper-cased level name, ``INFO`` when unrecognised."""
    candidate = level.strip().upper()
    return candidate if candidate in VALID_LEVELS else "INFO"


def setup_logging(level: str, log_dir: str = LOG_DIR) -> tuple[str, str]:
    """Route all logging to a timestamped file.

    Args:
        level: Desired level name for the ``scoutdash`` loggers (e.g. ``debug``).
        log_dir: Directory the log file is created in.

    Returns:
        A tuple of (log_file_path, validated_log_level).
    """
    valid_level = normalize_level(level)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, f"scoutdash_{stamp}_{valid_level}.log")

    log_cfg: dict = copy.deepcopy(BASE_LOG_CFG)
    log_cfg["handlers"]["file_handler"]["filename"] = log_path
    log_cfg["loggers"]["scoutdash"]["level"] = valid_level
    if valid_level == "DEBUG":
        log_cfg["loggers"]["httpx"]["level"] = "INFO"
        log_cfg["root"]["level"] = "DEBUG"

    logging.config.dictConfig(log_cfg)
    if valid_level != level.strip().upper():
        logger.warning("Invalid log level %r, using INFO", level)
    logger.info("Logging initialized at %s, file %s", valid_level, log_path)
    return log_path, valid_level


__all__ = ["VALID_LEVELS", "normalize_level", "setup_logging"]
