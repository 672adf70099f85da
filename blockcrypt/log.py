# Copyright (c) 2022-2023 SiumLhahah
# Distributed under the MIT software license, see the accompanying
# file COPYING or http://www.opensource.org/licenses/mit-license.php.

"""
blockcrypt.log

Logging setup for applications using blockcrypt.

The library only creates loggers; call setup_logging once from the
application to get output.

"""

import logging
import logging.handlers
import os
import sys
from .config import LOG_LEVELS, get_config
from .lib.exceptions import ConfigurationError


def setup_logging(
    level: str | None = None,
    log_file: str | None = None,
    log_format: str | None = None,
    max_files: int | None = None
) -> None:
    """Configure the root logger.

    Args:
        level: Logging level name, config.logging.level by default
        log_file: Optional file path, rotated by size
        log_format: Optional custom log format
        max_files: Number of rotated files to keep

    Raises ConfigurationError for invalid settings or an unknown level.
    """
    config = get_config()
    config.validate()
    level = level or config.logging.level
    if level.upper() not in LOG_LEVELS:
        raise ConfigurationError(f"Unknown log level: {level}")
    log_file = log_file if log_file is not None else config.logging.log_file
    log_format = log_format or config.logging.format
    max_files = max_files if max_files is not None else config.logging.max_files
    numeric_level = getattr(logging, level.upper())

    formatter = logging.Formatter(log_format)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=config.logging.max_file_size * 1024 * 1024,
            backupCount=max_files
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logger = logging.getLogger(__name__)
    logger.info("Logging configured with level: %s", level)
    if log_file:
        logger.info("Logging to file: %s", log_file)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name."""
    return logging.getLogger(name)
