"""
'scoping_core/logging_config.py': Process-wide logging setup driven by the LOG_LEVEL setting.
"""
import logging
from typing import Optional

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LOG_LEVELS = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

ROOT_LOGGER_NAME = "scoping"


def resolve_level(level_name: Optional[str]) -> int:
    """
    Map one of the five LOG_LEVEL settings to a logging level.

    Unknown or missing values fall back to ERROR.
    """
    return LOG_LEVELS.get((level_name or "").strip().lower(), logging.ERROR)


def setup_logging(log_level: Optional[str] = None) -> logging.Logger:
    """
    Configure the application logger once at startup.

    Args:
        log_level: One of trace, debug, info, warn, error.

    Returns:
        Configured root logger for the application.
    """
    level = resolve_level(log_level)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child of the application logger, e.g. `scoping.users`."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
