"""
JSON metadata filters supplied by the caller, e.g.::

    {"branch": ["main", "dev"], "team": "payments", "build": 42}

Each entry becomes an :class:`UnresolvedMetadataFilter`. Mapping the field name to
an internal field identifier is left to the per-tenant field catalog that owns it.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from tool_params.exceptions import CallerContractError

if TYPE_CHECKING:
    from tool_params.validation.context import ToolValidationContext

EXPECTED_FORMAT = '{"field":"value"} or {"field":["value1","value2"]}'


@dataclass(frozen=True)
class UnresolvedMetadataFilter:
    """A metadata filter whose field name has not yet been mapped to a field id."""

    field_name: str
    values: tuple[str, ...]

    def __post_init__(self) -> None:
        if self.field_name is None or not self.field_name.strip():
            raise CallerContractError("fieldName cannot be null or blank")
        if isinstance(self.values, str):
            raise CallerContractError(
                f"values for metadata field '{self.field_name}' must be a sequence, not a string"
            )
        values = tuple(self.values) if self.values is not None else ()
        if not values:
            raise CallerContractError(
                f"values for metadata field '{self.field_name}' cannot be empty"
            )
        object.__setattr__(self, "values", values)


# Shapes a single JSON value can take. Every accepted and rejected shape is
# decided in classify_filter_value().


@dataclass(frozen=True)
class ScalarFilterValue:
    text: str


@dataclass(frozen=True)
class ListFilterValue:
    items: tuple[str, ...]


@dataclass(frozen=True)
class RejectedFilterValue:
    reason: str


MetadataFilterValue = ScalarFilterValue | ListFilterValue | RejectedFilterValue


def format_number(number: int | float) -> str:
    """Render JSON numbers without a trailing fractional part when integral (42.0 -> "42")."""
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return str(number)


def _classify_item(item: Any) -> str | None:
    match item:
        case bool():
            return None
        case str() if item.strip():
            return item
        case int():
            return format_number(item)
        case float() if math.isfinite(item):
            return format_number(item)
        case _:
            return None


def classify_filter_value(raw: Any) -> MetadataFilterValue:
    match raw:
        case None:
            return RejectedFilterValue("value is null")
        case bool():
            return RejectedFilterValue("expected string, number or array of strings, got boolean")
        case str() if not raw.strip():
            return RejectedFilterValue("value is blank")
        case str():
            return ScalarFilterValue(raw)
        case int():
            return ScalarFilterValue(format_number(raw))
        case float() if math.isfinite(raw):
            return ScalarFilterValue(format_number(raw))
        case float():
            return RejectedFilterValue("number is not finite")
        case []:
            return RejectedFilterValue("array is empty")
        case list():
            items = [_classify_item(item) for item in raw]
            if any(item is None for item in items):
                return RejectedFilterValue(
                    "array contains non-string values (only non-blank strings and numbers allowed)"
                )
            return ListFilterValue(tuple(item for item in items if item is not None))
        case dict():
            return RejectedFilterValue("expected string or array of strings, got object")
        case _:
            return RejectedFilterValue(
                f"expected string or array of strings, got {type(raw).__name__}"
            )


class MetadataJsonFilterSpec:
    """
    Parses a JSON object of metadata filters.

    Every invalid field produces its own error naming the field and the problem;
    malformed JSON produces a single error describing the accepted shapes.
    Insertion order of the JSON object is preserved.
    """

    def __init__(self, ctx: ToolValidationContext, value: str | None, name: str) -> None:
        if name is None or not name.strip():
            raise CallerContractError("Parameter name cannot be null or blank")
        self._ctx = ctx
        self._value = value
        self._name = name

    def resolve(self) -> list[UnresolvedMetadataFilter] | None:
        if self._value is None or not self._value.strip():
            return None

        try:
            raw = json.loads(self._value)
        except json.JSONDecodeError as e:
            self._invalid_json(f"{e.msg} (line {e.lineno}, column {e.colno})")
            return None
        except ValueError:
            # integer literal longer than the interpreter's digit limit
            self._invalid_json("number too large")
            return None
        except RecursionError:
            self._invalid_json("nesting too deep")
            return None

        if not isinstance(raw, dict):
            self._ctx.add_error(
                f"Invalid JSON for {self._name}: expected a JSON object, "
                f"got {type(raw).__name__}. Expected format: {EXPECTED_FORMAT}"
            )
            return None

        if not raw:
            return None

        filters: list[UnresolvedMetadataFilter] = []
        failed = False
        for field_name, raw_value in raw.items():
            if not field_name.strip():
                self._ctx.add_error(f"Invalid field in {self._name}: field name cannot be blank")
                failed = True
                continue

            match classify_filter_value(raw_value):
                case ScalarFilterValue(text=text):
                    filters.append(UnresolvedMetadataFilter(field_name, (text,)))
                case ListFilterValue(items=items):
                    filters.append(UnresolvedMetadataFilter(field_name, items))
                case RejectedFilterValue(reason=reason):
                    self._ctx.add_error(
                        f"Invalid value in {self._name} for field '{field_name}': {reason}. "
                        f"Expected format: {EXPECTED_FORMAT}"
                    )
                    failed = True

        return None if failed else filters

    def _invalid_json(self, detail: str) -> None:
        self._ctx.add_error(
            f"Invalid JSON for {self._name}: {detail}. Expected format: {EXPECTED_FORMAT}"
        )
