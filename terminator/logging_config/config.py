"""Logging Configuration.

Settings for log levels, output formats and slow-call thresholds.
"""

from dataclasses import dataclass
from enum import Enum


class LogLevel(str, Enum):
    """Log level options."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output format."""
    JSON = "json"
    CONSOLE = "console"


@dataclass
class LoggingConfig:
    """Structured logging configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON
    include_caller: bool = True
    # Provider round-trips routinely take seconds; only flag the outliers.
    slow_threshold_ms: float = 15_000.0
    service_name: str = "terminator"


DEFAULT_LOGGING_CONFIG = LoggingConfig()
