"""
Shared fixtures.

Functions:
- reset_settings: Autouse fixture clearing the cached settings and the
    config-selecting environment variables.
- settings: Default settings instance for tools under test.
- json_logs: Configures DEBUG JSON logging and returns a reader that parses
    every line recorded by pytest's log capture during the test.
"""

import json
import logging
from collections.abc import Callable, Iterator
from typing import Any

import pytest
import structlog

import tool_params.logging as tool_logging
from tool_params.settings import ToolParamsSettings, get_settings


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv("TOOL_PARAMS_CONFIG", raising=False)
    monkeypatch.delenv("TOOL_PARAMS_ENV", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> ToolParamsSettings:
    return ToolParamsSettings()


def _reset_logging() -> None:
    tool_logging._configured = False
    logging.root.handlers = []
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def json_logs(caplog: pytest.LogCaptureFixture) -> Iterator[Callable[[], list[dict[str, Any]]]]:
    _reset_logging()
    tool_logging.configure_logging("tool-params-test", "DEBUG")

    def read() -> list[dict[str, Any]]:
        return [json.loads(message) for message in caplog.messages if message.startswith("{")]

    yield read
    _reset_logging()
