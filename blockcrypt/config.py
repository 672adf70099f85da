# Copyright (c) 2022-2023 SiumLhahah
# Distributed under the MIT software license, see the accompanying
# file COPYING or http://www.opensource.org/licenses/mit-license.php.

"""
blockcrypt.config

Configuration read from the environment (and a .env file).

Variables:
   - BLOCKCRYPT_CACHE_MAX_SIZE : bound of the cipher cache, 0 for none
   - BLOCKCRYPT_LOG_LEVEL : DEBUG, INFO, WARNING, ERROR or CRITICAL
   - BLOCKCRYPT_LOG_FILE : optional log file path

"""

import os
from dataclasses import dataclass, field
from threading import Lock
from dotenv import load_dotenv
from .lib.exceptions import ConfigurationError

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def _getenv_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(
            f"{name} must be an integer, got {value!r}") from e


@dataclass
class CacheConfig:
    """Cipher cache configuration."""
    max_size: int = field(
        default_factory=lambda: _getenv_int('BLOCKCRYPT_CACHE_MAX_SIZE', 0))


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = field(
        default_factory=lambda: os.getenv('BLOCKCRYPT_LOG_LEVEL', 'INFO'))
    format: str = '%(asctime)s %(levelname)s %(name)s: %(message)s'
    log_file: str = field(
        default_factory=lambda: os.getenv('BLOCKCRYPT_LOG_FILE', ''))
    max_file_size: int = 10  # MB
    max_files: int = 3


@dataclass
class AppConfig:
    """Main configuration."""
    cache: CacheConfig = field(default_factory=CacheConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> None:
        """Raise ConfigurationError if a setting is out of range."""
        if self.cache.max_size < 0:
            raise ConfigurationError(
                f"Cache max_size must not be negative: {self.cache.max_size}")
        if self.logging.level.upper() not in LOG_LEVELS:
            raise ConfigurationError(
                f"Unknown log level: {self.logging.level}")
        if self.logging.max_file_size <= 0 or self.logging.max_files < 0:
            raise ConfigurationError("Invalid log file rotation settings")


_config = None
_config_lock = Lock()


def get_config(reload=False) -> AppConfig:
    """Return the process-wide configuration.

    Built from the environment (and .env) on first call, so importing
    blockcrypt never reads it. A failed build is not kept.

    """
    global _config
    with _config_lock:
        if _config is None or reload:
            load_dotenv()
            _config = AppConfig()
        return _config
