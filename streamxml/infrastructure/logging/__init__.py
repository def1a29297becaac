"""Logging infrastructure.

This module provides logging adapters and implementations.
"""

from ...application.null_logger import NullLogger
from .console_logger import ConsoleLogger, LogContext, LogLevel

__all__ = [
    "ConsoleLogger",
    "LogContext",
    "LogLevel",
    "NullLogger",
]
