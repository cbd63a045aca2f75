"""Structured logging configuration for zoeylocator using structlog.

Matchers, the poll loop and the OCR recognizer log through event-style
messages with key/value context, e.g.
``logger.debug("match_found", method="brisk", confidence=0.91)``.
"""

import logging
import math
import os
import sys
import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, cast

import structlog

from ..config import get_settings

DISABLE_ENV_VAR = "ZOEYLOCATOR_DISABLE_CONSOLE_LOGGING"


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    structured: bool = True,
    console: bool = True,
    add_timestamp: bool = True,
    add_caller_info: bool = False,
    colorize: bool = True,
) -> None:
    """Configure structured logging for zoeylocator.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        structured: Use JSON structured output
        console: Enable console output (overridden by ZOEYLOCATOR_DISABLE_CONSOLE_LOGGING)
        add_timestamp: Add timestamps to logs
        add_caller_info: Add caller information
        colorize: Colorize console output (only for non-structured)
    """
    if os.getenv(DISABLE_ENV_VAR) == "1":
        console = False
        log_file = None

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
    ]

    if add_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if add_caller_info:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.LINENO,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                ]
            )
        )

    processors.extend(
        [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]
    )

    if structured:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=colorize and console))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = []

    if console:
        # stdout stays free for the host application
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(file_handler)

    if not handlers:
        handlers.append(logging.NullHandler())
        level = "CRITICAL"

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper()),
        handlers=handlers,
        force=True,
    )


_logging_initialized = False


def _ensure_logging_initialized() -> None:
    """Initialize logging on first use rather than at import time."""
    global _logging_initialized

    if _logging_initialized:
        return

    if os.getenv(DISABLE_ENV_VAR) == "1":
        logging.disable(logging.CRITICAL)
        _logging_initialized = True
        return

    try:
        settings = get_settings()
        log_file = None
        if settings.log_path is not None:
            log_file = settings.log_path / f"zoeylocator_{datetime.now().strftime('%Y%m%d')}.log"
        setup_logging(
            level="DEBUG" if settings.debug_mode else settings.log_level,
            log_file=log_file,
            structured=not settings.debug_mode,
            colorize=settings.debug_mode,
        )
    except (ImportError, AttributeError, OSError, ValueError):
        setup_logging(level="INFO", structured=False)

    _logging_initialized = True


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structured logger instance
    """
    _ensure_logging_initialized()
    return cast(structlog.BoundLogger, structlog.get_logger(name))


# Recent samples kept per operation; aggregates cover every sample.
MAX_SAMPLES = 1000


@dataclass
class _OperationStats:
    count: int = 0
    total: float = 0.0
    min: float = math.inf
    max: float = -math.inf
    recent: deque[float] = field(default_factory=lambda: deque(maxlen=MAX_SAMPLES))

    def add(self, value: float) -> None:
        self.count += 1
        self.total += value
        self.min = min(self.min, value)
        self.max = max(self.max, value)
        self.recent.append(value)

    def summary(self) -> dict[str, float]:
        return {
            "count": self.count,
            "mean": self.total / self.count,
            "min": self.min,
            "max": self.max,
            "total": self.total,
        }


class PerformanceLogger:
    """Logger for per-operation timings (matching, OCR, polling).

    Memory stays bounded over long-running sessions: only the latest
    ``max_samples`` durations are kept per operation, while count, total,
    min and max are running aggregates. Safe to share between threads.
    """

    def __init__(
        self, base_logger: structlog.BoundLogger | None = None, max_samples: int = MAX_SAMPLES
    ) -> None:
        """Initialize performance logger.

        Args:
            base_logger: Base logger to use
            max_samples: Recent durations retained per operation
        """
        self.logger = base_logger or get_logger(__name__)
        self.max_samples = max_samples
        self._stats: dict[str, _OperationStats] = {}
        self._lock = threading.Lock()

    @property
    def metrics(self) -> dict[str, list[float]]:
        """Snapshot of the retained recent durations per operation."""
        with self._lock:
            return {op: list(stats.recent) for op, stats in self._stats.items()}

    def log_timing(
        self, operation: str, duration_ms: float, success: bool = True, **kwargs
    ) -> None:
        """Log operation timing.

        Args:
            operation: Operation name
            duration_ms: Duration in milliseconds
            success: Whether the operation produced a result
            **kwargs: Additional context
        """
        with self._lock:
            stats = self._stats.get(operation)
            if stats is None:
                stats = _OperationStats(recent=deque(maxlen=self.max_samples))
                self._stats[operation] = stats
            stats.add(duration_ms)
        self.logger.debug(
            "performance_timing",
            operation=operation,
            duration_ms=round(duration_ms, 2),
            success=success,
            **kwargs,
        )

    def get_stats(self, operation: str | None = None) -> dict[str, Any]:
        """Get performance statistics.

        Args:
            operation: Optional specific operation

        Returns:
            Statistics dict
        """
        with self._lock:
            if operation:
                stats = self._stats.get(operation)
                return stats.summary() if stats else {}
            return {op: stats.summary() for op, stats in self._stats.items()}

    def reset(self) -> None:
        """Drop all recorded timings."""
        with self._lock:
            self._stats.clear()


_performance_logger: PerformanceLogger | None = None
_performance_lock = threading.Lock()


def get_performance_logger() -> PerformanceLogger:
    """Get the shared performance logger, creating it on first use."""
    global _performance_logger
    with _performance_lock:
        if _performance_logger is None:
            _performance_logger = PerformanceLogger()
        return _performance_logger
