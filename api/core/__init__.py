"""Core utilities for the Users API.

This module exports commonly used utilities for easy importing:
    from core import get_logger
"""

from core.logger import (
    LoggerAdapter,
    StructlogLoggerAdapter,
    configure_logging,
    get_logger,
)
from core.telemetry import Clock, Stopwatch

__all__ = [
    "Clock",
    "LoggerAdapter",
    "Stopwatch",
    "StructlogLoggerAdapter",
    "configure_logging",
    "get_logger",
]
