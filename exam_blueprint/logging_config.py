"""
Centralized logging configuration for the application.
"""
import logging
import sys

from exam_blueprint.config import get_log_level

LOGGER_NAME = "exam_blueprint"


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure the package logger; safe to call on every Streamlit rerun."""
    level_name = (level or get_log_level()).upper()
    numeric_level = getattr(logging, level_name, logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger
