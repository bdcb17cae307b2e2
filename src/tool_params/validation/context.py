"""
Request-scoped accumulator for validation feedback.

A :class:`ToolValidationContext` is created once per tool call. Parameter specs
obtained from its factories write into it, and the call proceeds to the data
fetch only when :meth:`ToolValidationContext.is_valid` holds::

    ctx = ToolValidationContext()
    severities = ctx.enum_set_param(raw_severities, Severity, "severities").resolve()
    start = ctx.date_param(raw_start, "startDate").resolve()
    end = ctx.date_param(raw_end, "endDate").resolve()
    ctx.validate_date_range(start, end, "startDate", "endDate")
    if not ctx.is_valid():
        return PaginatedToolResponse.validation_error(page, page_size, ctx.errors, ctx.warnings)
"""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum
from typing import TypeVar

from tool_params.validation.metadata_filter import MetadataJsonFilterSpec
from tool_params.validation.parsing import has_text
from tool_params.validation.specs import DateSpec, EnumSetSpec, IntSpec, StringListSpec, StringSpec

E = TypeVar("E", bound=Enum)

UUID_EXAMPLE = "550e8400-e29b-41d4-a716-446655440000"


class ToolValidationContext:
    """Ordered errors and warnings for one tool call. Errors are never removed."""

    def __init__(self) -> None:
        self._errors: list[str] = []
        self._warnings: list[str] = []

    # Parameter specs

    def int_param(self, value: int | None, name: str) -> IntSpec:
        return IntSpec(self, value, name)

    def string_param(self, value: str | None, name: str) -> StringSpec:
        return StringSpec(self, value, name)

    def string_list_param(self, value: str | None, name: str) -> StringListSpec:
        return StringListSpec(self, value, name)

    def enum_set_param(self, value: str | None, enum_type: type[E], name: str) -> EnumSetSpec[E]:
        return EnumSetSpec(self, value, enum_type, name)

    def date_param(self, value: str | None, name: str) -> DateSpec:
        return DateSpec(self, value, name)

    def metadata_json_filter_param(self, value: str | None, name: str) -> MetadataJsonFilterSpec:
        return MetadataJsonFilterSpec(self, value, name)

    # Cross-field checks

    def require(self, value: str | None, name: str) -> ToolValidationContext:
        if not has_text(value):
            self.add_error(f"{name} is required")
        return self

    def require_uuid(self, value: str | None, name: str) -> ToolValidationContext:
        """Required, and parseable as a UUID in its canonical hyphenated form."""
        if not has_text(value):
            self.add_error(f"{name} is required")
            return self
        text = value.strip() if value is not None else ""
        try:
            parsed = uuid.UUID(text)
        except ValueError:
            parsed = None
        if parsed is None or str(parsed) != text.lower():
            self.add_error(f"{name} must be a valid UUID format (e.g., {UUID_EXAMPLE})")
        return self

    def require_if_present(
        self,
        dependent_value: object | None,
        dependent_name: str,
        required_value: object | None,
        required_name: str,
    ) -> ToolValidationContext:
        """``dependent_name`` only makes sense together with ``required_name``."""
        if _is_present(dependent_value) and not _is_present(required_value):
            self.add_error(f"{dependent_name} requires {required_name} to be specified")
        return self

    def require_at_least_one(self, message: str, *values: object | None) -> ToolValidationContext:
        if not any(_is_present(value) for value in values):
            self.add_error(message)
        return self

    def mutually_exclusive(
        self,
        first_present: bool,
        first_name: str,
        second_present: bool,
        second_name: str,
        hint: str,
    ) -> ToolValidationContext:
        if first_present and second_present:
            self.add_error(f"{first_name} and {second_name} are mutually exclusive. {hint}")
        return self

    def validate_date_range(
        self,
        start: datetime | None,
        end: datetime | None,
        start_name: str,
        end_name: str,
    ) -> ToolValidationContext:
        """Start must not be after end. Skipped when either bound is missing."""
        if start is not None and end is not None and start > end:
            self.add_error(
                f"Invalid date range: {start_name} must be before {end_name}. "
                f"Example: {start_name}='2025-01-01', {end_name}='2025-12-31'"
            )
        return self

    def warn_if(self, condition: bool, message: str) -> ToolValidationContext:
        if condition:
            self.add_warning(message)
        return self

    def error_if(self, condition: bool, message: str) -> ToolValidationContext:
        if condition:
            self.add_error(message)
        return self

    # Accumulator

    def add_error(self, message: str) -> None:
        self._errors.append(message)

    def add_warning(self, message: str) -> None:
        self._warnings.append(message)

    def is_valid(self) -> bool:
        return not self._errors

    @property
    def errors(self) -> list[str]:
        return list(self._errors)

    @property
    def warnings(self) -> list[str]:
        return list(self._warnings)


def _is_present(value: object | None) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True
