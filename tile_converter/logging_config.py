#!/usr/bin/env python3
"""
Logging configuration for the tile converter
Provides consistent logging setup across all modules
"""

import logging
import os
import sys
from typing import Optional

from .constants import DEBUG_ENV_VAR

LOGGER_NAME = "tile_converter"


def setup_logging(level: str = "INFO",
                  log_file: Optional[str] = None) -> logging.Logger:
    """
    Setup logging configuration for the tile converter.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file to write logs to (defaults to console only)

    Returns:
        Configured logger instance
    """
    if os.environ.get(DEBUG_ENV_VAR, "").lower() in ("1", "true", "yes"):
        level = "DEBUG"

    # Convert string level to logging constant
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    # Clear any existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Optional file handler
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(numeric_level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Could not create log file {log_file}: {e}")

    # Prevent propagation to root logger
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (e.g., 'image_processor' or __name__)

    Returns:
        Logger instance
    """
    if name.startswith(f"{LOGGER_NAME}."):
        name = name[len(LOGGER_NAME) + 1:]
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
