"""lrukit utility modules."""

from .logging import (
    MetricsLogger,
    current_manager,
    get_logger,
    get_metrics_logger,
    initialize_logging,
    reset_logging,
    set_correlation_id,
    get_correlation_id,
    clear_correlation_id,
    with_correlation_id
)
from .logging_config import (
    LoggingPresets,
    configure_from_environment,
    get_logging_config
)

__all__ = [
    # Logging functions
    "MetricsLogger",
    "current_manager",
    "get_logger",
    "get_metrics_logger",
    "initialize_logging",
    "reset_logging",
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
    "with_correlation_id",
    # Logging configuration
    "LoggingPresets",
    "configure_from_environment",
    "get_logging_config"
]
