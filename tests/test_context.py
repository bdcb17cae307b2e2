"""
Unit tests for ToolValidationContext and its cross-field checks.

Run:
    pytest tests/test_context.py -v
"""

from datetime import UTC, datetime

import pytest

from tool_params.validation import ToolValidationContext


@pytest.fixture
def ctx() -> ToolValidationContext:
    return ToolValidationContext()


class TestValidityGate:
    def test_new_context_is_valid(self, ctx):
        assert ctx.is_valid() is True
        assert ctx.errors == []
        assert ctx.warnings == []

    def test_warnings_do_not_affect_validity(self, ctx):
        for i in range(5):
            ctx.add_warning(f"warning {i}")

        assert ctx.is_valid() is True
        assert len(ctx.warnings) == 5

    def test_validity_is_never_regained(self, ctx):
        ctx.add_error("boom")
        ctx.int_param(5, "n").range(1, 10).resolve()
        ctx.string_param("ok", "s").resolve()

        assert ctx.is_valid() is False

    def test_messages_keep_insertion_order(self, ctx):
        ctx.add_error("first")
        ctx.add_warning("w1")
        ctx.add_error("second")
        ctx.add_warning("w2")

        assert ctx.errors == ["first", "second"]
        assert ctx.warnings == ["w1", "w2"]

    def test_accessors_return_copies(self, ctx):
        ctx.add_error("boom")
        ctx.errors.append("injected")
        ctx.warnings.append("injected")

        assert ctx.errors == ["boom"]
        assert ctx.warnings == []

    def test_independent_violations_are_all_reported(self, ctx):
        ctx.string_param("nope", "quickFilter").allowed_values({"ALL"}).resolve()
        ctx.string_list_param("x,y", "statuses").allowed_values({"Reported"}).resolve()
        ctx.string_param(None, "appId").required().resolve()

        assert len(ctx.errors) == 4


class TestRequire:
    @pytest.mark.parametrize("value", [None, "", "  "])
    def test_missing_value(self, ctx, value):
        ctx.require(value, "appId")

        assert ctx.errors == ["appId is required"]

    def test_present_value(self, ctx):
        ctx.require("abc", "appId")

        assert ctx.is_valid()


class TestRequireUuid:
    def test_valid_uuid(self, ctx):
        ctx.require_uuid("550e8400-e29b-41d4-a716-446655440000", "appId")

        assert ctx.is_valid()

    def test_upper_case_uuid_is_accepted(self, ctx):
        ctx.require_uuid("550E8400-E29B-41D4-A716-446655440000", "appId")

        assert ctx.is_valid()

    @pytest.mark.parametrize(
        "value",
        [
            "not-a-uuid",
            "550e8400e29b41d4a716446655440000",
            "{550e8400-e29b-41d4-a716-446655440000}",
        ],
    )
    def test_malformed_uuid(self, ctx, value):
        ctx.require_uuid(value, "appId")

        assert ctx.errors == [
            "appId must be a valid UUID format (e.g., 550e8400-e29b-41d4-a716-446655440000)"
        ]

    def test_missing_uuid_is_required_error(self, ctx):
        ctx.require_uuid(None, "appId")

        assert ctx.errors == ["appId is required"]


class TestCrossFieldChecks:
    def test_require_if_present(self, ctx):
        ctx.require_if_present("value", "sessionMetadataValue", None, "sessionMetadataName")

        assert ctx.errors == ["sessionMetadataValue requires sessionMetadataName to be specified"]

    def test_require_if_present_satisfied(self, ctx):
        ctx.require_if_present("value", "sessionMetadataValue", "branch", "sessionMetadataName")
        ctx.require_if_present(None, "sessionMetadataValue", None, "sessionMetadataName")
        ctx.require_if_present("  ", "sessionMetadataValue", None, "sessionMetadataName")

        assert ctx.is_valid()

    def test_require_at_least_one(self, ctx):
        ctx.require_at_least_one("Specify appId or appName", None, " ")

        assert ctx.errors == ["Specify appId or appName"]

    def test_require_at_least_one_satisfied(self, ctx):
        ctx.require_at_least_one("Specify appId or appName", None, "billing")

        assert ctx.is_valid()

    def test_mutually_exclusive(self, ctx):
        ctx.mutually_exclusive(True, "appId", True, "appName", "Use only one.")

        assert ctx.errors == ["appId and appName are mutually exclusive. Use only one."]

    @pytest.mark.parametrize("first,second", [(True, False), (False, True), (False, False)])
    def test_mutually_exclusive_satisfied(self, ctx, first, second):
        ctx.mutually_exclusive(first, "appId", second, "appName", "Use only one.")

        assert ctx.is_valid()

    def test_inverted_date_range(self, ctx):
        ctx.validate_date_range(
            datetime(2025, 12, 31, tzinfo=UTC),
            datetime(2025, 1, 1, tzinfo=UTC),
            "startDate",
            "endDate",
        )

        assert ctx.errors == [
            "Invalid date range: startDate must be before endDate. "
            "Example: startDate='2025-01-01', endDate='2025-12-31'"
        ]

    def test_equal_dates_are_a_valid_range(self, ctx):
        day = datetime(2025, 3, 1, tzinfo=UTC)
        ctx.validate_date_range(day, day, "startDate", "endDate")

        assert ctx.is_valid()

    def test_open_ended_range_is_skipped(self, ctx):
        ctx.validate_date_range(None, datetime(2025, 1, 1, tzinfo=UTC), "startDate", "endDate")

        assert ctx.is_valid()

    def test_warn_if_and_error_if(self, ctx):
        ctx.warn_if(True, "heads up").warn_if(False, "hidden")
        ctx.error_if(False, "hidden").error_if(True, "bad")

        assert ctx.warnings == ["heads up"]
        assert ctx.errors == ["bad"]
