"""Performance Logging.

Timing helpers for provider round-trips and catalog refreshes.
Every call is logged at DEBUG; calls slower than the threshold
are promoted to WARNING.
"""

import asyncio
import functools
import logging
import time
from typing import Any, Callable, Optional

from terminator.logging_config.config import DEFAULT_LOGGING_CONFIG

logger = logging.getLogger(__name__)


def _report(
    _logger: logging.Logger,
    operation: str,
    duration_ms: float,
    threshold_ms: float,
    extra: Optional[dict] = None,
) -> None:
    extra = {"duration_ms": round(duration_ms, 2), **(extra or {})}
    if duration_ms >= threshold_ms:
        _logger.warning(f"Slow operation: {operation} took {duration_ms:.1f}ms", extra=extra)
    else:
        _logger.debug(f"{operation} completed in {duration_ms:.1f}ms", extra=extra)


def log_performance(
    threshold_ms: Optional[float] = None,
    logger_name: Optional[str] = None,
    include_args: bool = False,
) -> Callable:
    """Decorator that logs function execution time.

    Works on both plain and ``async`` functions. Failures are logged at
    ERROR with their duration and then re-raised untouched.

    Args:
        threshold_ms: Slow operation threshold in milliseconds.
                     Defaults to ``LoggingConfig.slow_threshold_ms``.
        logger_name: Custom logger name. Defaults to function's module.
        include_args: Whether to include a short argument summary.

    Example:
        @log_performance(threshold_ms=5000)
        async def send_message(self, model_id, ...):
            ...
    """
    if threshold_ms is None:
        threshold_ms = DEFAULT_LOGGING_CONFIG.slow_threshold_ms

    def decorator(func: Callable) -> Callable:
        _logger = logging.getLogger(logger_name or func.__module__)
        func_name = f"{func.__qualname__}"

        def _extra(args: tuple, kwargs: dict) -> dict:
            return {"extra_data": _summarize_args(args, kwargs)} if include_args else {}

        def _failed(start: float, exc: BaseException) -> None:
            duration_ms = (time.perf_counter() - start) * 1000
            _logger.error(
                f"{func_name} failed after {duration_ms:.1f}ms: {type(exc).__name__}",
                extra={"duration_ms": round(duration_ms, 2)},
            )

        if asyncio.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                start = time.perf_counter()
                try:
                    result = await func(*args, **kwargs)
                except Exception as exc:
                    _failed(start, exc)
                    raise
                _report(_logger, func_name, (time.perf_counter() - start) * 1000,
                        threshold_ms, _extra(args, kwargs))
                return result
            return async_wrapper

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                _failed(start, exc)
                raise
            _report(_logger, func_name, (time.perf_counter() - start) * 1000,
                    threshold_ms, _extra(args, kwargs))
            return result
        return sync_wrapper

    return decorator


def _summarize_args(args: tuple, kwargs: dict, max_len: int = 100) -> str:
    """Create a short summary of function arguments for logging."""
    parts = []
    for arg in args[:3]:
        rep = repr(arg)
        if len(rep) > max_len:
            rep = rep[:max_len] + "..."
        parts.append(rep)
    if len(args) > 3:
        parts.append(f"... +{len(args) - 3} more args")

    for key, val in list(kwargs.items())[:3]:
        rep = repr(val)
        if len(rep) > max_len:
            rep = rep[:max_len] + "..."
        parts.append(f"{key}={rep}")

    return ", ".join(parts)


class PerformanceTimer:
    """Context manager for timing code blocks.

    Example:
        with PerformanceTimer("catalog refresh") as timer:
            options = await gather_listings()
        print(f"Refresh took {timer.duration_ms:.1f}ms")
    """

    def __init__(self, operation_name: str, threshold_ms: Optional[float] = None):
        self.operation_name = operation_name
        self.threshold_ms = threshold_ms or DEFAULT_LOGGING_CONFIG.slow_threshold_ms
        self.start_time: float = 0
        self.duration_ms: float = 0

    def __enter__(self) -> "PerformanceTimer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.duration_ms = (time.perf_counter() - self.start_time) * 1000

        if exc_type is not None:
            logger.error(
                f"{self.operation_name} failed after {self.duration_ms:.1f}ms: {exc_type.__name__}",
                extra={"duration_ms": round(self.duration_ms, 2)},
            )
        else:
            _report(logger, self.operation_name, self.duration_ms, self.threshold_ms)
