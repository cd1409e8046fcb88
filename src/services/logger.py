"""
Logger Service Module
Centralized logging configuration: colored console output, optional rotating
log file, optional JSON structured records, and timing of pipeline operations
"""

import json
import logging
import sys
import time
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import colorlog

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


class LoggerService:
    """
    Owns the root logger's handlers:
    - console handler (colorlog, or JSON when json_logs is set)
    - rotating file handler when log_file is set
    """

    def __init__(self, config: dict[str, Any] | None = None):
        self.config = {**self._default_config(), **(config or {})}
        self.handlers: list[logging.Handler] = []
        self._setup_root_logger()

    def _default_config(self) -> dict[str, Any]:
        """Default logging configuration"""
        return {
            "level": "INFO",
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            "date_format": "%Y-%m-%d %H:%M:%S",
            "log_file": None,
            "max_bytes": 5 * 1024 * 1024,  # 5MB
            "backup_count": 3,
            "json_logs": False,
            "colored_output": True,
        }

    def _setup_root_logger(self):
        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, str(self.config["level"]).upper(), logging.INFO))

        for handler in self.handlers:
            root_logger.removeHandler(handler)
        self.handlers = [self._create_console_handler()]

        if self.config.get("log_file"):
            self.handlers.append(self._create_file_handler(Path(self.config["log_file"])))

        for handler in self.handlers:
            root_logger.addHandler(handler)

    def _create_console_handler(self) -> logging.Handler:
        handler = logging.StreamHandler(sys.stderr)

        if self.config.get("json_logs"):
            handler.setFormatter(JsonFormatter())
        elif self.config.get("colored_output"):
            handler.setFormatter(
                colorlog.ColoredFormatter(
                    "%(log_color)s" + self.config["format"],
                    datefmt=self.config["date_format"],
                    log_colors=LOG_COLORS,
                )
            )
        else:
            handler.setFormatter(
                logging.Formatter(self.config["format"], datefmt=self.config["date_format"])
            )
        return handler

    def _create_file_handler(self, file_path: Path) -> logging.Handler:
        """Create rotating file handler"""
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            handler: logging.Handler = RotatingFileHandler(
                file_path,
                maxBytes=self.config["max_bytes"],
                backupCount=self.config["backup_count"],
            )
        except OSError:
            # Don't fail hard if filesystem isn't writable (common in CI/sandboxes).
            handler = logging.StreamHandler(sys.stderr)

        if self.config.get("json_logs"):
            handler.setFormatter(JsonFormatter())
        else:
            handler.setFormatter(
                logging.Formatter(self.config["format"], datefmt=self.config["date_format"])
            )
        return handler

    def get_logger(self, name: str) -> logging.Logger:
        return logging.getLogger(name)

    def set_level(self, level: str, logger_name: str | None = None):
        """Set logging level for a specific logger or the root logger"""
        level_value = getattr(logging, level.upper())
        logging.getLogger(logger_name).setLevel(level_value)

    def cleanup(self):
        """Detach and close the handlers this service installed"""
        root_logger = logging.getLogger()
        for handler in self.handlers:
            root_logger.removeHandler(handler)
            handler.close()
        self.handlers.clear()


_RESERVED_RECORD_FIELDS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Fields passed through `extra=`
        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_FIELDS:
                log_data[key] = value

        return json.dumps(log_data, default=str)


class PerformanceLogger:
    """Context manager that logs how long an operation took"""

    def __init__(self, logger: logging.Logger, operation: str, level: int = logging.DEBUG):
        self.logger = logger
        self.operation = operation
        self.level = level
        self.start_time: float | None = None
        self.duration: float | None = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration = time.perf_counter() - self.start_time

        if exc_type:
            self.logger.error(
                f"Operation '{self.operation}' failed after {self.duration * 1000:.2f}ms: {exc_val}"
            )
        else:
            self.logger.log(
                self.level,
                f"Operation '{self.operation}' completed in {self.duration * 1000:.2f}ms",
            )
        return False


# Global logger service instance
_logger_service: LoggerService | None = None


def setup_logging(config: dict | None = None) -> logging.Logger:
    """
    Setup logging configuration and return root logger

    Args:
        config: Optional overrides on top of the application LOGGING section

    Returns:
        Configured root logger
    """
    global _logger_service

    from config import config as app_config

    log_config = dict(app_config.LOGGING)
    if config:
        log_config.update(config)

    if _logger_service is not None:
        _logger_service.cleanup()
    _logger_service = LoggerService(log_config)

    return logging.getLogger()


def get_logger(name: str) -> logging.Logger:
    """Get a named logger, configuring logging on first use"""
    if _logger_service is None:
        setup_logging()
    return _logger_service.get_logger(name)


def cleanup_logging():
    """Clean up logging resources"""
    global _logger_service

    if _logger_service:
        _logger_service.cleanup()
        _logger_service = None
