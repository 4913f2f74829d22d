"""
Tests for logging configuration and helpers.
"""

import logging

import pytest

from asyncops.logging import (
    configure_logging,
    get_logger,
    is_debug_mode,
    log_error,
    log_performance,
    set_component_log_level,
    set_debug_mode,
)
from asyncops.logging.config import get_component_log_levels


@pytest.fixture
def restore_root_handlers():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    set_debug_mode(False)


class TestConfiguration:
    def test_component_levels_apply(self):
        logger = get_logger("asyncops.fetch.http")

        assert logger.level == get_component_log_levels()["fetch.http"]

    def test_debug_mode_toggle(self):
        set_debug_mode(True)
        assert is_debug_mode()
        assert logging.getLogger("asyncops").level == logging.DEBUG

        set_debug_mode(False)
        assert not is_debug_mode()

    def test_component_level_updates_existing_loggers(self):
        logger = get_logger("asyncops.fetch.http")
        original = get_component_log_levels()["fetch.http"]

        try:
            set_component_log_level("fetch.http", logging.DEBUG)

            assert logger.level == logging.DEBUG
            assert get_component_log_levels()["fetch.http"] == logging.DEBUG
        finally:
            set_component_log_level("fetch.http", original)

    def test_file_logging(self, tmp_path, restore_root_handlers):
        configure_logging(log_dir=tmp_path)

        get_logger("asyncops.tests").info("hello file")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "hello file" in (tmp_path / "asyncops.log").read_text()


class TestLogPerformance:
    def test_sync_function(self, caplog):
        @log_performance(logger=logging.getLogger("asyncops.tests.perf"))
        def add(a, b):
            return a + b

        with caplog.at_level(logging.DEBUG, logger="asyncops.tests.perf"):
            assert add(2, 3) == 5

        assert "Performance:" in caplog.text
        assert "add" in caplog.text

    @pytest.mark.asyncio
    async def test_coroutine_function(self, caplog):
        @log_performance(logger=logging.getLogger("asyncops.tests.perf"))
        async def double(value):
            return value * 2

        with caplog.at_level(logging.DEBUG, logger="asyncops.tests.perf"):
            assert await double(4) == 8

        assert "double" in caplog.text

    def test_threshold_suppresses_fast_calls(self, caplog):
        @log_performance(logger=logging.getLogger("asyncops.tests.perf"), threshold_ms=60_000)
        def fast():
            return None

        with caplog.at_level(logging.DEBUG, logger="asyncops.tests.perf"):
            fast()

        assert "Performance:" not in caplog.text


class TestLogError:
    def test_includes_traceback(self, caplog):
        logger = logging.getLogger("asyncops.tests.errors")
        try:
            raise ValueError("broken value")
        except ValueError as e:
            with caplog.at_level(logging.ERROR, logger="asyncops.tests.errors"):
                log_error(e, logger=logger)

        assert "ValueError: broken value" in caplog.text
        assert "Traceback" in caplog.text

    def test_plain_message(self, caplog):
        logger = logging.getLogger("asyncops.tests.errors")

        with caplog.at_level(logging.WARNING, logger="asyncops.tests.errors"):
            log_error("just text", logger=logger, level=logging.WARNING)

        assert caplog.records[-1].getMessage() == "just text"
