"""
Logging Configuration

Provides structured logging with console, rotating file and JSON handlers,
plus timing of persistence operations.
"""

import logging
import logging.handlers
import os
import sys
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
from pythonjsonlogger import jsonlogger

from gomarket_cart.infrastructure.utilities.constants import (
    LoggingSettings,
    PerformanceSettings,
)


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for console output"""

    colors = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }

    def format(self, record: logging.LogRecord) -> str:
        # Work on a copy so file handlers don't receive escape codes
        record = logging.makeLogRecord(record.__dict__)
        log_color = self.colors.get(record.levelname, self.colors['RESET'])
        record.levelname = f"{log_color}{record.levelname}{self.colors['RESET']}"
        return super().format(record)


class CartJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter with cart-specific fields"""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["process_id"] = os.getpid()

        if hasattr(record, "storage_key"):
            log_record["storage_key"] = record.storage_key

        if hasattr(record, "operation_time"):
            log_record["operation_time_ms"] = record.operation_time


@dataclass
class LoggingConfigOptions:
    """Dataclass for logging configuration options"""
    log_level: str = "INFO"
    log_dir: str = "logs"
    enable_console: bool = True
    enable_file: bool = True
    enable_json: bool = True
    max_file_size: int = LoggingSettings.MAX_LOG_FILE_SIZE
    backup_count: int = LoggingSettings.MAIN_LOG_BACKUP_COUNT


class LoggingConfig:
    """Logging configuration for the cart"""

    def __init__(self, options: LoggingConfigOptions):
        self.options = options

        if self.options.enable_file or self.options.enable_json:
            Path(self.options.log_dir).mkdir(parents=True, exist_ok=True)

        self._configure_structlog()

    def __repr__(self):
        return f"LoggingConfig(options={self.options})"

    def _configure_structlog(self):
        """Configure structlog for structured logging"""
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.UnicodeDecoder(),
                structlog.processors.JSONRenderer()
            ],
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    def setup_logging(self):
        """Setup root logger handlers"""
        level = getattr(logging, self.options.log_level.upper())

        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        plain_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        if self.options.enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(level)
            console_handler.setFormatter(ColoredFormatter(
                fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            root_logger.addHandler(console_handler)

        if self.options.enable_file:
            app_handler = logging.handlers.RotatingFileHandler(
                Path(self.options.log_dir) / LoggingSettings.MAIN_LOG_FILE,
                maxBytes=self.options.max_file_size,
                backupCount=self.options.backup_count,
                encoding="utf-8",
            )
            app_handler.setLevel(level)
            app_handler.setFormatter(plain_formatter)
            root_logger.addHandler(app_handler)

        if self.options.enable_json:
            json_handler = logging.handlers.RotatingFileHandler(
                Path(self.options.log_dir) / LoggingSettings.JSON_LOG_FILE,
                maxBytes=self.options.max_file_size,
                backupCount=LoggingSettings.JSON_LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
            json_handler.setLevel(level)
            json_handler.setFormatter(CartJsonFormatter())
            root_logger.addHandler(json_handler)

        self._configure_external_loggers()

        logger = logging.getLogger(__name__)
        logger.info(
            "Logging configured - Level: %s, Console: %s, File: %s, JSON: %s",
            self.options.log_level,
            self.options.enable_console,
            self.options.enable_file,
            self.options.enable_json
        )

    def _configure_external_loggers(self):
        """Configure external loggers like sqlalchemy"""
        logging.getLogger('sqlalchemy').setLevel(logging.WARNING)


class OperationTimer:
    """Context manager logging how long a storage operation took"""

    def __init__(
        self,
        operation_name: str,
        logger: Optional[logging.Logger] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.operation_name = operation_name
        self.logger = logger or logging.getLogger(__name__)
        self.details = details or {}
        self.start_time = 0.0
        self.duration_ms = 0.0

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration_ms = (time.perf_counter() - self.start_time) * 1000
        extra = {
            "operation": self.operation_name,
            "operation_time": self.duration_ms,
            "success": exc_type is None,
            **self.details,
        }

        if exc_type is not None:
            self.logger.error(
                "Failed operation: %s (%.1fms)", self.operation_name, self.duration_ms,
                extra={**extra, "error_type": exc_type.__name__},
            )
        elif self.duration_ms > PerformanceSettings.SLOW_WRITE_THRESHOLD_MS:
            self.logger.warning(
                "Slow operation: %s took %.1fms", self.operation_name, self.duration_ms,
                extra=extra,
            )
        else:
            self.logger.debug(
                "Completed operation: %s (%.1fms)", self.operation_name, self.duration_ms,
                extra=extra,
            )
        return False


def setup_logging(options: LoggingConfigOptions):
    """Setup logging using the LoggingConfig class"""
    config = LoggingConfig(options)
    config.setup_logging()


def get_structured_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance"""
    return structlog.get_logger(name)
