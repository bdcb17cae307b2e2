"""
Parsing helpers shared by the parameter specs.

Every helper treats ``None`` and whitespace-only input as "absent" and returns
``None`` for it, so callers can distinguish "not supplied" from "supplied but
empty after cleanup".
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, date, datetime, time

from tool_params.logging import get_logger

logger = get_logger(__name__)

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_EPOCH_MILLIS = re.compile(r"^-?\d+$")


def has_text(value: str | None) -> bool:
    return value is not None and bool(value.strip())


def parse_comma_separated(value: str | None) -> list[str] | None:
    """
    Split on commas, trim every token and drop empty ones.

    >>> parse_comma_separated("CRITICAL, HIGH, ")
    ['CRITICAL', 'HIGH']
    >>> parse_comma_separated(" , ") is None
    True
    """
    if value is None or not value.strip():
        return None
    tokens = [token.strip() for token in value.split(",")]
    result = [token for token in tokens if token]
    return result or None


@dataclass(frozen=True)
class ParseResult:
    """Parsed value plus an optional caller-facing message describing why parsing failed."""

    value: datetime | None
    message: str | None = None


def invalid_date_message(name: str, raw: str) -> str:
    return (
        f"Invalid {name} date '{raw}'. Expected ISO format (YYYY-MM-DD) like '2025-01-15' "
        f"or epoch timestamp like '1705276800000'."
    )


def parse_date(value: str | None, name: str) -> ParseResult:
    """
    Parse an epoch-millisecond string or a strict ``YYYY-MM-DD`` date.

    ISO dates resolve to midnight UTC. Returned datetimes are always timezone-aware.
    """
    if value is None or not value.strip():
        return ParseResult(None)
    text = value.strip()

    if _EPOCH_MILLIS.match(text):
        try:
            return ParseResult(datetime.fromtimestamp(int(text) / 1000, tz=UTC))
        except (OverflowError, OSError, ValueError):
            pass
    elif _ISO_DATE.match(text):
        try:
            return ParseResult(datetime.combine(date.fromisoformat(text), time.min, tzinfo=UTC))
        except ValueError:
            pass

    message = invalid_date_message(name, value)
    logger.warning("invalid_date_parameter", parameter=name, value=value)
    return ParseResult(None, message)
