"""Logging module for zoeylocator."""

from .logger import PerformanceLogger, get_logger, get_performance_logger, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "PerformanceLogger",
    "get_performance_logger",
]
