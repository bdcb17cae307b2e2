"""
Fluent, single-use parameter specs.

A spec is obtained from a :class:`~tool_params.validation.context.ToolValidationContext`
factory, configured through chained calls and finished with ``resolve()``::

    page_size = (
        ctx.int_param(raw_page_size, "pageSize")
        .default_to(50, "pageSize not specified, using 50")
        .range(1, 100)
        .resolve()
    )

``resolve()`` appends warnings (defaults applied, values clamped) and errors
(values the caller must fix) to the owning context and returns the normalized
value. It returns ``None`` when there is no value and no default, or when this
particular field failed. That ``None`` is advisory: whether the request may
proceed is decided only by ``ctx.is_valid()``.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Generic, Self, TypeVar

from tool_params.exceptions import CallerContractError
from tool_params.validation.parsing import parse_comma_separated, parse_date

if TYPE_CHECKING:
    from tool_params.validation.context import ToolValidationContext

V = TypeVar("V")
E = TypeVar("E", bound=Enum)


def invalid_value_message(name: str, value: str, valid_values: Iterable[str]) -> str:
    return f"Invalid {name}: '{value}'. Valid values: {', '.join(valid_values)}"


class ParamSpec(Generic[V]):
    """Shared state of every spec: owning context, raw input, display name and default."""

    def __init__(self, ctx: ToolValidationContext, name: str) -> None:
        if name is None or not name.strip():
            raise CallerContractError("Parameter name cannot be null or blank")
        self._ctx = ctx
        self._name = name
        self._default: V | None = None
        self._default_reason: str | None = None

    @property
    def name(self) -> str:
        return self._name

    def default_to(self, value: V, reason: str | None = None) -> Self:
        """
        Value to substitute when the parameter is absent or blank.

        ``reason`` is reported as a warning whenever the default is used, so the
        caller learns what was assumed on its behalf.
        """
        self._default = value
        self._default_reason = reason
        return self

    def _use_default(self) -> V | None:
        if self._default is None:
            return None
        self._ctx.add_warning(
            self._default_reason
            or f"{self._name} not specified, using default {self._describe(self._default)}"
        )
        return self._copy_default(self._default)

    def _copy_default(self, value: V) -> V:
        return value

    def _describe(self, value: V) -> str:
        return str(value)


class IntSpec(ParamSpec[int]):
    """Integers never fail: out-of-range values are clamped with a warning."""

    def __init__(self, ctx: ToolValidationContext, value: int | None, name: str) -> None:
        super().__init__(ctx, name)
        self._value = value
        self._min: int | None = None
        self._max: int | None = None

    def range(self, min_value: int, max_value: int) -> Self:
        if min_value > max_value:
            raise CallerContractError(
                f"Invalid range for {self._name}: min {min_value} is greater than max {max_value}"
            )
        self._min = min_value
        self._max = max_value
        return self

    def resolve(self) -> int | None:
        if self._value is None:
            return self._use_default()

        value = self._value
        if self._min is not None and value < self._min:
            self._ctx.add_warning(f"{self._name} clamped from {value} to minimum {self._min}")
            return self._min
        if self._max is not None and value > self._max:
            self._ctx.add_warning(f"{self._name} clamped from {value} to maximum {self._max}")
            return self._max
        return value


class StringSpec(ParamSpec[str]):
    def __init__(self, ctx: ToolValidationContext, value: str | None, name: str) -> None:
        super().__init__(ctx, name)
        self._value = value
        self._allowed: frozenset[str] | None = None
        self._required = False
        self._upper = False

    def allowed_values(self, values: Iterable[str]) -> Self:
        """Exact-match allow list (combine with ``to_upper_case`` for case-insensitive input)."""
        self._allowed = frozenset(values)
        return self

    def required(self) -> Self:
        self._required = True
        return self

    def to_upper_case(self) -> Self:
        self._upper = True
        return self

    def resolve(self) -> str | None:
        result = self._value.strip() if self._value is not None and self._value.strip() else None
        if result is not None and self._upper:
            result = result.upper()

        if result is None:
            result = self._use_default()

        if result is None:
            if self._required:
                self._ctx.add_error(f"{self._name} is required")
            return None

        if self._allowed is not None and result not in self._allowed:
            self._ctx.add_error(invalid_value_message(self._name, result, sorted(self._allowed)))
            return None
        return result


class StringListSpec(ParamSpec[list[str]]):
    """Comma-separated list; tokens are trimmed and empty tokens dropped."""

    def __init__(self, ctx: ToolValidationContext, value: str | None, name: str) -> None:
        super().__init__(ctx, name)
        self._value = value
        self._allowed: frozenset[str] | None = None
        self._upper = False

    def allowed_values(self, values: Iterable[str]) -> Self:
        """
        Canonical allowed values, matched case-insensitively: "reported"
        resolves to "Reported". Each unknown token is reported as its own error.
        """
        self._allowed = frozenset(values)
        return self

    def to_upper_case(self) -> Self:
        self._upper = True
        return self

    def _copy_default(self, value: list[str]) -> list[str]:
        return list(value)

    def _describe(self, value: list[str]) -> str:
        return ", ".join(value)

    def resolve(self) -> list[str] | None:
        tokens = parse_comma_separated(self._value)
        if tokens is None:
            return self._use_default()

        if self._upper:
            tokens = [token.upper() for token in tokens]

        if self._allowed is None:
            return tokens

        canonical = {allowed.lower(): allowed for allowed in self._allowed}
        valid_listing = sorted(self._allowed)
        normalized: list[str] = []
        failed = False
        for token in tokens:
            canonical_value = canonical.get(token.lower())
            if canonical_value is None:
                self._ctx.add_error(invalid_value_message(self._name, token, valid_listing))
                failed = True
            else:
                normalized.append(canonical_value)
        return None if failed else normalized


class EnumSetSpec(ParamSpec[frozenset[E]]):
    """Comma-separated, case-insensitive enum member names parsed into a set of members."""

    def __init__(
        self,
        ctx: ToolValidationContext,
        value: str | None,
        enum_type: type[E],
        name: str,
    ) -> None:
        super().__init__(ctx, name)
        self._value = value
        self._enum_type = enum_type

    def _copy_default(self, value: frozenset[E]) -> frozenset[E]:
        return frozenset(value)

    def _describe(self, value: frozenset[E]) -> str:
        return ", ".join(sorted(member.name for member in value))

    def resolve(self) -> frozenset[E] | None:
        tokens = parse_comma_separated(self._value)
        if tokens is None:
            return self._use_default()

        members = {
            member_name.upper(): member
            for member_name, member in self._enum_type.__members__.items()
        }
        valid_listing = list(self._enum_type.__members__)
        result: set[E] = set()
        failed = False
        for token in tokens:
            member = members.get(token.upper())
            if member is None:
                self._ctx.add_error(invalid_value_message(self._name, token, valid_listing))
                failed = True
            else:
                result.add(member)
        return None if failed else frozenset(result)


class DateSpec(ParamSpec[datetime]):
    """``YYYY-MM-DD`` (midnight UTC) or epoch milliseconds."""

    def __init__(self, ctx: ToolValidationContext, value: str | None, name: str) -> None:
        super().__init__(ctx, name)
        self._value = value

    def _describe(self, value: datetime) -> str:
        return value.date().isoformat()

    def resolve(self) -> datetime | None:
        parsed = parse_date(self._value, self._name)
        if parsed.message is not None:
            self._ctx.add_error(parsed.message)
            return None
        if parsed.value is None:
            return self._use_default()
        return parsed.value
