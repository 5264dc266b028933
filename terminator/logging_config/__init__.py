"""Structured logging for the Terminator chat core.

Provides JSON/console log formatting, per-send context binding
and timing helpers for provider calls.
"""

from terminator.logging_config.config import LogFormat, LoggingConfig, LogLevel
from terminator.logging_config.context import RequestContext, generate_request_id
from terminator.logging_config.performance import PerformanceTimer, log_performance
from terminator.logging_config.setup import configure_logging, get_logger

__all__ = [
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "PerformanceTimer",
    "RequestContext",
    "configure_logging",
    "generate_request_id",
    "get_logger",
    "log_performance",
]
