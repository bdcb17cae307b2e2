"""
Unit tests for logging configuration.

Run:
    pytest tests/test_logging.py -v
"""

# mypy: disallow-untyped-defs=False, check-untyped-defs=False

import json
import logging

import pytest
import structlog

import tool_params.logging as tool_logging
from tool_params.logging import configure_logging, get_logger, new_request_id, request_context
from tool_params.settings import (
    LoggingSettings,
    ServiceSettings,
    ToolParamsSettings,
    configure_logging_from_settings,
)


class TestLoggingConfiguration:
    """Test structured logging setup"""

    def test_configure_logging_sets_service_name(self, capsys):
        """Service name should appear in every log entry"""
        configure_logging("search-tools", "INFO")
        logger = get_logger("test_module")

        logger.info("test_event", tool="search_attacks")

        log_dict = json.loads(capsys.readouterr().out.strip())
        assert log_dict["service"] == "search-tools"
        assert log_dict["event"] == "test_event"
        assert log_dict["tool"] == "search_attacks"

    def test_log_level_configuration(self):
        """Log level should be configurable"""
        configure_logging("search-tools", "WARNING")

        assert logging.getLogger().level == logging.WARNING

    def test_json_output_structure(self, capsys):
        """Logs should be valid JSON with required fields"""
        configure_logging("search-tools", "INFO")
        logger = get_logger("test_module")

        logger.info("test_event", item_count=3)

        log_dict = json.loads(capsys.readouterr().out.strip())
        for field in ("timestamp", "level", "service", "event", "logger"):
            assert field in log_dict
        assert log_dict["level"] == "info"
        assert log_dict["logger"] == "test_module"

    def test_error_logging_includes_exc_info(self, capsys):
        """Error logs should include exception information"""
        configure_logging("search-tools", "ERROR")
        logger = get_logger("test_module")

        try:
            raise ValueError("Test error")
        except ValueError:
            logger.error("error_occurred", exc_info=True)

        log_dict = json.loads(capsys.readouterr().out.strip())
        assert "exception" in log_dict

    def test_configure_logging_idempotent(self, capsys):
        """configure_logging should be idempotent (multiple calls safe)"""
        configure_logging("search-tools-1", "INFO")
        get_logger("test").info("first_call")
        first = json.loads(capsys.readouterr().out.strip())

        configure_logging("search-tools-2", "DEBUG")
        get_logger("test").info("second_call")
        second = json.loads(capsys.readouterr().out.strip())

        assert first["service"] == "search-tools-1"
        assert second["service"] == "search-tools-1"

    def test_debug_logging_filtered_by_level(self, capsys):
        """Debug logs should be filtered when level is INFO"""
        configure_logging("search-tools", "INFO")
        logger = get_logger(__name__)

        logger.debug("debug_message")
        logger.info("info_message")

        lines = [line for line in capsys.readouterr().out.strip().split("\n") if line]
        assert len(lines) == 1
        assert json.loads(lines[0])["event"] == "info_message"


class TestConfigureFromSettings:
    def test_service_name_and_level_come_from_settings(self, capsys):
        settings = ToolParamsSettings(
            service=ServiceSettings(name="search-tools"),
            logging=LoggingSettings(level="warning"),
        )

        configure_logging_from_settings(settings)
        get_logger("test_module").warning("configured")

        assert logging.getLogger().level == logging.WARNING
        log_dict = json.loads(capsys.readouterr().out.strip())
        assert log_dict["service"] == "search-tools"

    def test_defaults_to_cached_settings(self):
        configure_logging_from_settings()

        assert logging.getLogger().level == logging.INFO

class TestRequestContext:
    def test_request_id_is_bound_inside_block(self, capsys):
        configure_logging("search-tools", "INFO")
        logger = get_logger("test_module")

        with request_context(tool="search_attacks") as request_id:
            logger.info("inside")

        log_dict = json.loads(capsys.readouterr().out.strip())
        assert log_dict["request_id"] == request_id
        assert log_dict["tool"] == "search_attacks"

    def test_context_is_cleared_after_block(self, capsys):
        configure_logging("search-tools", "INFO")
        logger = get_logger("test_module")

        with request_context(tool="search_attacks"):
            pass
        logger.info("outside")

        log_dict = json.loads(capsys.readouterr().out.strip())
        assert "request_id" not in log_dict
        assert "tool" not in log_dict

    def test_request_ids_are_short_and_unique(self):
        ids = {new_request_id() for _ in range(50)}

        assert len(ids) == 50
        assert all(len(request_id) == 8 for request_id in ids)


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration between tests"""
    tool_logging._configured = False
    logging.root.handlers = []
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()

    yield

    tool_logging._configured = False
    structlog.reset_defaults()
    logging.root.handlers = []
    structlog.contextvars.clear_contextvars()
