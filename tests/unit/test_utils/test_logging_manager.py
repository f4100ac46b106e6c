"""
Unit tests for logging manager
"""

import logging

import pytest

from utils.logging_manager import (
    LogContext, LoggingManager, log_execution, logging_manager, ModuleLoggers
)


@pytest.mark.unit
class TestLoggingManager:
    """Test cases for LoggingManager"""

    def test_singleton(self):
        assert LoggingManager() is logging_manager

    def test_module_loggers(self):
        assert ModuleLoggers.API.name == "API"
        assert ModuleLoggers.get_logger("Catalog") is ModuleLoggers.Catalog

    def test_set_level(self):
        logging_manager.set_level("DEBUG", "Export")
        assert logging.getLogger("Export").level == logging.DEBUG
        logging_manager.set_level("INFO", "Export")

    def test_log_context_metrics(self):
        logging_manager.reset_metrics()
        with LogContext("Export", "render", quote_id=3):
            pass
        metrics = logging_manager.get_metrics()
        assert metrics["Export.render.ID:3_started"] == 1
        assert metrics["Export.render.ID:3_completed"] == 1

    def test_log_context_failure_propagates(self):
        logging_manager.reset_metrics()
        with pytest.raises(RuntimeError):
            with LogContext("Export", "render"):
                raise RuntimeError("boom")
        assert logging_manager.get_metrics()["Export.render_failed"] == 1

    def test_log_execution_sync(self):
        logging_manager.reset_metrics()

        @log_execution("Catalog", "double")
        def double(x):
            return x * 2

        assert double(4) == 8
        assert logging_manager.get_metrics()["Catalog.double_completed"] == 1

    @pytest.mark.asyncio
    async def test_log_execution_async(self):
        logging_manager.reset_metrics()

        @log_execution("API")
        async def fetch():
            return "ok"

        assert await fetch() == "ok"
        assert logging_manager.get_metrics()["API.fetch_completed"] == 1
