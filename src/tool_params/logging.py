"""
Structured JSON logging for tool parameter validation and tool pipelines.

Usage:
    from tool_params.logging import configure_logging, get_logger

    # Once, by the host process
    configure_logging("search-tools", log_level="INFO")

    # In any module
    logger = get_logger(__name__)
    logger.info("tool_execution_success", tool="search_attacks", item_count=12)

    # Correlate every line emitted during one tool call
    with request_context(tool="search_attacks") as request_id:
        ...
"""

import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, cast

import structlog
from structlog.types import EventDict, Processor

_configured = False


def configure_logging(service_name: str, log_level: str = "INFO") -> None:
    """
    Configure structured JSON logging for the host process.

    Idempotent: only the first call installs handlers and processors.

    Args:
        service_name: Value attached as ``service`` to every log entry
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL

    Every entry carries an ISO timestamp, the log level, the logger name,
    the service name and any request-scoped context bound through
    :func:`request_context`.
    """
    global _configured
    if _configured:
        return

    level = getattr(logging, log_level.upper(), logging.INFO)

    def add_service_name(
        _logger: Any,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        event_dict["service"] = service_name
        return event_dict

    processors: list[Processor] = [
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        add_service_name,
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.dict_tracebacks,
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root_logger = logging.getLogger()
    for h in root_logger.handlers[:]:
        root_logger.removeHandler(h)

    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    _configured = True


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """
    Get a structured logger for a module.

    Args:
        name: Module name (typically __name__). Optional.

    Returns:
        structlog BoundLogger instance
    """
    return cast(structlog.BoundLogger, structlog.get_logger(name))


def new_request_id() -> str:
    """Short identifier used to correlate the log lines of one tool call."""
    return uuid.uuid4().hex[:8]


@contextmanager
def request_context(**extra: Any) -> Iterator[str]:
    """
    Bind a fresh ``request_id`` (plus any extra keys) into structlog
    contextvars for the duration of the block.

    Yields:
        The generated request id
    """
    request_id = new_request_id()
    with structlog.contextvars.bound_contextvars(request_id=request_id, **extra):
        yield request_id
