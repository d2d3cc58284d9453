"""
Structured logging for lrukit.

Library modules log through ``logging.getLogger(__name__)`` and install no
handlers. An application that wants lrukit's JSON output calls
``initialize_logging`` once; caches built with a ``MetricsLogger`` then emit
hit, miss and eviction events as structured records.
"""
import json
import logging
import logging.handlers
import sys
import threading
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

# Correlation ID of the current context, copied onto every record
correlation_id: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)

# Attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    'message', 'asctime', 'taskName', 'extra_fields', 'correlation_id',
}

_TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class StructuredFormatter(logging.Formatter):
    """
    Formats each record as one JSON object per line.

    Fields: timestamp, level, logger, message, module, function, line, plus
    correlation_id when set, exception details when present, and any extra
    fields passed by the caller.
    """

    def __init__(self, include_correlation_id: bool = True):
        super().__init__()
        self.include_correlation_id = include_correlation_id

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if self.include_correlation_id:
            current = correlation_id.get() or getattr(record, 'correlation_id', None)
            if current:
                log_entry["correlation_id"] = current

        # exc_info=True outside an except block yields (None, None, None)
        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        log_entry.update(getattr(record, 'extra_fields', {}))
        for key, value in record.__dict__.items():
            if key.startswith('_') or key in _RECORD_ATTRS:
                continue
            if isinstance(value, (str, int, float, bool, list, dict, type(None))):
                log_entry[key] = value

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class CorrelationIdFilter(logging.Filter):
    """Copies the context's correlation ID onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        current = correlation_id.get()
        if current:
            record.correlation_id = current
        return True


class MetricsLogger:
    """
    Emits cache events as structured records.

    Per-key events (hit, miss, eviction) go out at DEBUG so they stay silent
    in production; utilization snapshots go out at INFO.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def _emit(self, level: int, message: str, event_type: str, **fields: Any) -> None:
        if self.logger.isEnabledFor(level):
            self.logger.log(
                level,
                message,
                extra={'extra_fields': {'event_type': event_type, **fields}},
            )

    def log_cache_hit(self, cache_type: str, key: str, **kwargs):
        self._emit(logging.DEBUG, "Cache hit", 'cache_hit', cache_type=cache_type, cache_key=key, **kwargs)

    def log_cache_miss(self, cache_type: str, key: str, **kwargs):
        self._emit(logging.DEBUG, "Cache miss", 'cache_miss', cache_type=cache_type, cache_key=key, **kwargs)

    def log_cache_eviction(self, cache_type: str, key: str, **kwargs):
        """Log the key dropped to make room for a new entry."""
        self._emit(logging.DEBUG, "Cache eviction", 'cache_eviction', cache_type=cache_type, cache_key=key, **kwargs)

    def log_cache_stats(self, cache_name: str, stats_dict: Dict[str, Any], **kwargs):
        """
        Log a utilization snapshot.

        Args:
            cache_name: Name of the cache
            stats_dict: Output of CacheStats.to_dict() or CacheMetrics.to_dict()
            **kwargs: Additional metadata
        """
        self._emit(logging.INFO, "Cache stats", 'cache_stats', cache_name=cache_name, **stats_dict, **kwargs)


class LogManager:
    """
    Owns the handlers lrukit installs on the root logger.

    Only handlers this manager added are ever removed, so an application's
    own logging setup survives ``shutdown``.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: 'json' or 'text'
        log_file: Optional path for a rotating file handler
        max_bytes: Size at which the log file rotates
        backup_count: Number of rotated files to keep
        include_correlation_id: Whether to attach correlation IDs
    """

    def __init__(self,
                 log_level: str = "INFO",
                 log_format: str = "json",
                 log_file: Optional[str] = None,
                 max_bytes: int = 10 * 1024 * 1024,  # 10MB
                 backup_count: int = 5,
                 include_correlation_id: bool = True):
        self.log_level = getattr(logging, log_level.upper())
        self.log_format = log_format
        self.log_file = log_file
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self.include_correlation_id = include_correlation_id

        self._lock = threading.RLock()
        self._handlers: List[logging.Handler] = []
        self._initialized = False

        self.install()
        self.metrics = MetricsLogger(self.get_logger("lrukit"))

    def _build_handlers(self) -> List[logging.Handler]:
        if self.log_format == "json":
            formatter: logging.Formatter = StructuredFormatter(self.include_correlation_id)
        else:
            formatter = logging.Formatter(_TEXT_FORMAT)

        handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
        if self.log_file:
            Path(self.log_file).parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.handlers.RotatingFileHandler(
                self.log_file,
                maxBytes=self.max_bytes,
                backupCount=self.backup_count
            ))

        for handler in handlers:
            handler.setLevel(self.log_level)
            handler.setFormatter(formatter)
            if self.include_correlation_id:
                handler.addFilter(CorrelationIdFilter())
        return handlers

    def install(self):
        """Attach handlers to the root logger (no-op if already installed)."""
        with self._lock:
            if self._initialized:
                return
            root_logger = logging.getLogger()
            root_logger.setLevel(self.log_level)
            self._handlers = self._build_handlers()
            for handler in self._handlers:
                root_logger.addHandler(handler)
            self._initialized = True

    def shutdown(self):
        """Detach and close the handlers this manager installed."""
        with self._lock:
            root_logger = logging.getLogger()
            for handler in self._handlers:
                root_logger.removeHandler(handler)
                handler.close()
            self._handlers = []
            self._initialized = False

    def get_logger(self, name: str) -> logging.Logger:
        """Return the named logger, set to this manager's level."""
        logger = logging.getLogger(name)
        logger.setLevel(self.log_level)
        return logger

    def describe(self) -> Dict[str, Any]:
        return {
            "status": "initialized",
            "log_level": self.log_level,
            "log_format": self.log_format,
            "log_file": self.log_file,
            "max_bytes": self.max_bytes,
            "backup_count": self.backup_count,
            "include_correlation_id": self.include_correlation_id,
            "initialized": self._initialized,
        }


_log_manager: Optional[LogManager] = None
_log_manager_lock = threading.RLock()


def initialize_logging(**settings: Any) -> LogManager:
    """
    Install lrukit's handlers; keyword arguments are passed to LogManager.

    The first call wins. Later calls return the existing manager until
    ``reset_logging`` is called.
    """
    global _log_manager

    with _log_manager_lock:
        if _log_manager is None:
            _log_manager = LogManager(**settings)
        return _log_manager


def reset_logging():
    """Tear down the global manager so the next initialize_logging reconfigures."""
    global _log_manager

    with _log_manager_lock:
        if _log_manager is not None:
            _log_manager.shutdown()
            _log_manager = None


def current_manager() -> Optional[LogManager]:
    """The active manager, or None before initialize_logging."""
    return _log_manager


def get_logger(name: str) -> logging.Logger:
    """Get a named logger, initializing logging with defaults if needed."""
    return initialize_logging().get_logger(name)


def get_metrics_logger() -> MetricsLogger:
    """Get the shared MetricsLogger, initializing logging with defaults if needed."""
    return initialize_logging().metrics


def set_correlation_id(correlation_id_value: str):
    correlation_id.set(correlation_id_value)


def get_correlation_id() -> Optional[str]:
    return correlation_id.get()


def clear_correlation_id():
    correlation_id.set(None)


@contextmanager
def with_correlation_id(correlation_id_value: Optional[str] = None) -> Iterator[str]:
    """
    Set a correlation ID for the duration of the block.

    A random ID is generated when none is given. The previous ID is restored
    on exit.
    """
    value = correlation_id_value or str(uuid.uuid4())
    token = correlation_id.set(value)
    try:
        yield value
    finally:
        correlation_id.reset(token)
