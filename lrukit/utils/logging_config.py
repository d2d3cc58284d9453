"""
Logging configuration utilities for lrukit.

This module provides pre-configured logging setups for different environments
and configuration from environment variables.
"""
import os
from typing import Any, Dict, Optional

from lrukit.exceptions import ConfigurationError
from .logging import LogManager, current_manager, initialize_logging

_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_VALID_FORMATS = ("json", "text")


class LoggingPresets:
    """Pre-configured logging setups for different environments."""

    @staticmethod
    def development(log_file: Optional[str] = None) -> LogManager:
        """
        Development environment logging configuration.

        Logs everything, including per-key cache hits and misses.
        """
        return initialize_logging(
            log_level="DEBUG",
            log_format="text",
            log_file=log_file,
            max_bytes=5 * 1024 * 1024,  # 5MB
            backup_count=3,
            include_correlation_id=True
        )

    @staticmethod
    def production(log_file: Optional[str] = None) -> LogManager:
        """
        Production environment logging configuration.

        JSON lines at INFO, so cache stats are kept but per-key events are not.
        """
        return initialize_logging(
            log_level="INFO",
            log_format="json",
            log_file=log_file,
            max_bytes=50 * 1024 * 1024,  # 50MB
            backup_count=10,
            include_correlation_id=True
        )

    @staticmethod
    def testing(log_file: Optional[str] = None) -> LogManager:
        """Testing environment logging configuration."""
        return initialize_logging(
            log_level="WARNING",
            log_format="text",
            log_file=log_file,
            max_bytes=1 * 1024 * 1024,  # 1MB
            backup_count=1,
            include_correlation_id=False
        )


def _env_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}", e) from e
    if value < 0:
        raise ConfigurationError(f"{name} cannot be negative, got {value}")
    return value


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def configure_from_environment() -> LogManager:
    """
    Configure logging based on environment variables.

    Environment variables:
    - LRUKIT_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - LRUKIT_LOG_FORMAT: Log format (json, text)
    - LRUKIT_LOG_FILE: Log file path
    - LRUKIT_LOG_MAX_BYTES: Max file size in bytes
    - LRUKIT_LOG_BACKUP_COUNT: Number of backup files
    - LRUKIT_LOG_INCLUDE_CORRELATION_ID: Include correlation IDs (true/false)

    Returns:
        Configured log manager

    Raises:
        ConfigurationError: If a variable holds an unusable value.
    """
    log_level = os.getenv("LRUKIT_LOG_LEVEL", "INFO").upper()
    if log_level not in _VALID_LEVELS:
        raise ConfigurationError(f"LRUKIT_LOG_LEVEL must be one of {', '.join(_VALID_LEVELS)}, got {log_level!r}")

    log_format = os.getenv("LRUKIT_LOG_FORMAT", "json").lower()
    if log_format not in _VALID_FORMATS:
        raise ConfigurationError(f"LRUKIT_LOG_FORMAT must be 'json' or 'text', got {log_format!r}")

    return initialize_logging(
        log_level=log_level,
        log_format=log_format,
        log_file=os.getenv("LRUKIT_LOG_FILE") or None,
        max_bytes=_env_int("LRUKIT_LOG_MAX_BYTES", "10485760"),  # 10MB default
        backup_count=_env_int("LRUKIT_LOG_BACKUP_COUNT", "5"),
        include_correlation_id=_env_bool("LRUKIT_LOG_INCLUDE_CORRELATION_ID", "true")
    )


def get_logging_config() -> Dict[str, Any]:
    """
    Get current logging configuration.

    Returns:
        Dictionary with current logging configuration
    """
    manager = current_manager()
    if manager is None:
        return {"status": "not_initialized"}
    return manager.describe()
