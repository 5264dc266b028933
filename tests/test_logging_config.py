"""Tests for structured logging and send-scoped context."""

import asyncio
import json
import logging
import time

import pytest

from terminator.logging_config.config import LogFormat, LoggingConfig, LogLevel
from terminator.logging_config.context import (
    RequestContext,
    generate_request_id,
    get_context_dict,
    get_request_id,
    get_session_id,
)
from terminator.logging_config.performance import PerformanceTimer, log_performance
from terminator.logging_config.setup import (
    ConsoleFormatter,
    StructuredFormatter,
    configure_logging,
    get_logger,
)


def _record(msg="test", level=logging.INFO, lineno=1, exc_info=None, name="test"):
    return logging.LogRecord(
        name=name, level=level, pathname="test.py",
        lineno=lineno, msg=msg, args=(), exc_info=exc_info,
    )


class TestLoggingConfig:
    """Tests for logging configuration dataclasses."""

    def test_default_config_values(self):
        config = LoggingConfig()
        assert config.level == LogLevel.INFO
        assert config.format == LogFormat.JSON
        assert config.include_caller is True
        assert config.slow_threshold_ms == 15_000.0
        assert config.service_name == "terminator"

    def test_custom_config(self):
        config = LoggingConfig(
            level=LogLevel.DEBUG,
            format=LogFormat.CONSOLE,
            slow_threshold_ms=500.0,
            service_name="test",
        )
        assert config.level == LogLevel.DEBUG
        assert config.format == LogFormat.CONSOLE
        assert config.slow_threshold_ms == 500.0

    def test_log_level_enum_values(self):
        assert LogLevel.DEBUG.value == "DEBUG"
        assert LogLevel.WARNING.value == "WARNING"
        assert LogLevel.CRITICAL.value == "CRITICAL"

    def test_log_format_enum_values(self):
        assert LogFormat.JSON.value == "json"
        assert LogFormat.CONSOLE.value == "console"


class TestRequestContext:
    """Tests for send-scoped context management."""

    def test_generate_request_id_unique(self):
        ids = {generate_request_id() for _ in range(100)}
        assert len(ids) == 100

    def test_request_id_is_uuid_format(self):
        assert len(generate_request_id().split("-")) == 5

    def test_context_sets_request_id(self):
        with RequestContext(request_id="test-123"):
            assert get_request_id() == "test-123"
        assert get_request_id() == ""

    def test_context_sets_session_id(self):
        with RequestContext(session_id="sess-1"):
            assert get_session_id() == "sess-1"
        assert get_session_id() == ""

    def test_inner_context_inherits_session_id(self):
        with RequestContext(session_id="sess-1"):
            with RequestContext(extra={"provider": "gemini"}):
                assert get_session_id() == "sess-1"
                assert get_context_dict()["provider"] == "gemini"

    def test_auto_generates_request_id(self):
        with RequestContext() as ctx:
            assert ctx.request_id != ""
            assert get_request_id() == ctx.request_id

    def test_get_context_dict(self):
        with RequestContext(request_id="r1", session_id="s1", extra={"model": "gpt-4o"}):
            ctx = get_context_dict()
            assert ctx == {"request_id": "r1", "session_id": "s1", "model": "gpt-4o"}

    def test_context_dict_empty_outside(self):
        assert get_context_dict() == {}

    def test_bind_extra_context(self):
        with RequestContext(request_id="r1") as ctx:
            ctx.bind(provider="openai", model="gpt-4o")
            d = get_context_dict()
            assert d["provider"] == "openai"
            assert d["model"] == "gpt-4o"
        assert get_context_dict() == {}

    def test_elapsed_ms(self):
        with RequestContext() as ctx:
            time.sleep(0.01)
            assert ctx.elapsed_ms >= 10

    def test_nested_contexts_restore_outer(self):
        with RequestContext(request_id="outer"):
            with RequestContext(request_id="inner"):
                assert get_request_id() == "inner"
            assert get_request_id() == "outer"

    @pytest.mark.asyncio
    async def test_concurrent_tasks_are_isolated(self):
        async def worker(rid):
            with RequestContext(request_id=rid):
                await asyncio.sleep(0.01)
                return get_request_id()

        results = await asyncio.gather(worker("a"), worker("b"), worker("c"))
        assert results == ["a", "b", "c"]


class TestStructuredFormatter:
    """Tests for JSON structured log formatting."""

    def test_formats_as_json(self):
        parsed = json.loads(StructuredFormatter().format(_record("hello world")))
        assert parsed["message"] == "hello world"
        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "test"
        assert "timestamp" in parsed

    def test_includes_service_name(self):
        parsed = json.loads(StructuredFormatter(service_name="my-service").format(_record()))
        assert parsed["service"] == "my-service"

    def test_default_service_name(self):
        parsed = json.loads(StructuredFormatter().format(_record()))
        assert parsed["service"] == "terminator"

    def test_includes_caller_info(self):
        parsed = json.loads(StructuredFormatter(include_caller=True).format(_record(lineno=42)))
        assert parsed["line"] == 42
        assert "module" in parsed
        assert "function" in parsed

    def test_excludes_caller_when_disabled(self):
        parsed = json.loads(StructuredFormatter(include_caller=False).format(_record(lineno=42)))
        assert "line" not in parsed
        assert "function" not in parsed

    def test_includes_request_context(self):
        formatter = StructuredFormatter()
        with RequestContext(request_id="ctx-test", session_id="sess-9"):
            parsed = json.loads(formatter.format(_record()))
        assert parsed["request_id"] == "ctx-test"
        assert parsed["session_id"] == "sess-9"

    def test_formats_exception(self):
        formatter = StructuredFormatter()
        try:
            raise ValueError("test error")
        except ValueError:
            import sys
            parsed = json.loads(formatter.format(
                _record("failed", level=logging.ERROR, exc_info=sys.exc_info())
            ))
        assert parsed["exception"]["type"] == "ValueError"
        assert "test error" in parsed["exception"]["message"]

    def test_includes_extra_fields(self):
        record = _record()
        record.duration_ms = 42.5
        record.status_code = 200
        record.provider = "anthropic"
        record.model_count = 7
        parsed = json.loads(StructuredFormatter().format(record))
        assert parsed["duration_ms"] == 42.5
        assert parsed["status_code"] == 200
        assert parsed["provider"] == "anthropic"
        assert parsed["model_count"] == 7


class TestConsoleFormatter:
    """Tests for colored console log formatting."""

    def test_formats_readable_output(self):
        output = ConsoleFormatter().format(_record("hello", name="test.module"))
        assert "test.module" in output
        assert "hello" in output

    def test_includes_level_name(self):
        output = ConsoleFormatter().format(_record("warn", level=logging.WARNING))
        assert "WARNING" in output

    def test_includes_context_info(self):
        with RequestContext(request_id="abc"):
            output = ConsoleFormatter().format(_record())
        assert "request_id=abc" in output

    def test_has_color_codes(self):
        output = ConsoleFormatter().format(_record("error", level=logging.ERROR))
        assert "\033[31m" in output  # Red for ERROR


class TestConfigureLogging:
    """Tests for the configure_logging setup function."""

    def test_configures_root_logger(self):
        configure_logging(LoggingConfig(format=LogFormat.CONSOLE))
        assert len(logging.getLogger().handlers) == 1

    def test_json_format(self):
        configure_logging(LoggingConfig(format=LogFormat.JSON))
        assert isinstance(logging.getLogger().handlers[0].formatter, StructuredFormatter)

    def test_console_format(self):
        configure_logging(LoggingConfig(format=LogFormat.CONSOLE))
        assert isinstance(logging.getLogger().handlers[0].formatter, ConsoleFormatter)

    def test_sets_log_level(self):
        configure_logging(LoggingConfig(level=LogLevel.DEBUG))
        assert logging.getLogger().level == logging.DEBUG

    def test_get_logger_returns_logger(self):
        logger = get_logger("test.module")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "test.module"

    def test_quiets_http_client_loggers(self):
        configure_logging()
        assert logging.getLogger("httpx").level >= logging.WARNING
        assert logging.getLogger("httpcore").level >= logging.WARNING

    def test_env_var_override_level(self, monkeypatch):
        monkeypatch.setenv("TERMINATOR_LOG_LEVEL", "DEBUG")
        configure_logging(LoggingConfig(level=LogLevel.ERROR))
        assert logging.getLogger().level == logging.DEBUG

    def test_env_var_override_format(self, monkeypatch):
        monkeypatch.setenv("TERMINATOR_LOG_FORMAT", "CONSOLE")
        configure_logging(LoggingConfig(format=LogFormat.JSON))
        assert isinstance(logging.getLogger().handlers[0].formatter, ConsoleFormatter)

    def test_invalid_env_var_ignored(self, monkeypatch):
        monkeypatch.setenv("TERMINATOR_LOG_LEVEL", "LOUD")
        configure_logging(LoggingConfig(level=LogLevel.ERROR))
        assert logging.getLogger().level == logging.ERROR


class TestPerformanceLogging:
    """Tests for performance timing decorator and context manager."""

    def test_log_performance_sync(self):
        @log_performance(threshold_ms=10000)
        def fast_func():
            return 42

        assert fast_func() == 42

    @pytest.mark.asyncio
    async def test_log_performance_async(self):
        @log_performance(threshold_ms=10000)
        async def async_func():
            return "ok"

        assert await async_func() == "ok"

    def test_log_performance_preserves_name(self):
        @log_performance()
        def my_function():
            """My docstring."""

        assert my_function.__name__ == "my_function"
        assert my_function.__doc__ == "My docstring."

    def test_log_performance_with_exception(self):
        @log_performance(threshold_ms=10000)
        def failing_func():
            raise ValueError("test error")

        with pytest.raises(ValueError, match="test error"):
            failing_func()

    @pytest.mark.asyncio
    async def test_log_performance_async_exception(self):
        @log_performance(threshold_ms=10000)
        async def async_failing():
            raise RuntimeError("async fail")

        with pytest.raises(RuntimeError, match="async fail"):
            await async_failing()

    def test_slow_call_logged_as_warning(self, caplog):
        @log_performance(threshold_ms=0, logger_name="perf.test")
        def slow():
            return 1

        with caplog.at_level(logging.DEBUG, logger="perf.test"):
            slow()
        assert any(r.levelno == logging.WARNING and "Slow operation" in r.getMessage()
                   for r in caplog.records)

    def test_performance_timer_records_duration(self):
        with PerformanceTimer("test_op") as timer:
            time.sleep(0.01)
        assert timer.duration_ms >= 10

    def test_performance_timer_with_exception(self):
        with pytest.raises(ValueError):
            with PerformanceTimer("failing_op") as timer:
                raise ValueError("oops")
        assert timer.duration_ms >= 0

    def test_log_performance_with_args(self):
        @log_performance(threshold_ms=10000, include_args=True)
        def func_with_args(a, b, c=None):
            return a + b

        assert func_with_args(1, 2, c=3) == 3
