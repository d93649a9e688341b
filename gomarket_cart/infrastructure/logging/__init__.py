"""
Logging Infrastructure

Structured logging setup and operation timing.
"""

from .logger_config import (
    LoggingConfigOptions,
    OperationTimer,
    get_structured_logger,
    setup_logging,
)

__all__ = [
    "LoggingConfigOptions",
    "OperationTimer",
    "get_structured_logger",
    "setup_logging",
]
