"""
Unit tests for VulnerabilitySearchParams.

Run:
    pytest tests/test_vulnerability_params.py -v
"""

from datetime import UTC, datetime
from unittest.mock import Mock

import pytest

from tool_params.exceptions import CallerContractError
from tool_params.tools.vulnerabilities import (
    Environment,
    SearchVulnerabilitiesTool,
    Severity,
    VulnerabilitySearchParams,
)

STATUS_DEFAULT_WARNING = (
    "Showing actionable vulnerabilities only (excluding Fixed and Remediated). "
    "To see all statuses, specify statuses parameter explicitly."
)
TIME_FILTER_NOTE = "Time filters apply to LAST ACTIVITY DATE (lastTimeSeen), not discovery date."


class TestRequiredAppId:
    @pytest.mark.parametrize("app_id", [None, "", "  "])
    def test_missing_app_id(self, app_id):
        params = VulnerabilitySearchParams.of(app_id)

        assert params.errors == ["appId is required"]
        assert params.app_id is None

    def test_app_id_is_trimmed(self):
        assert VulnerabilitySearchParams.of(" app-1 ").app_id == "app-1"


class TestStatuses:
    def test_default_statuses_with_reason(self):
        params = VulnerabilitySearchParams.of("app-1")

        assert params.statuses == ["Reported", "Suspicious", "Confirmed"]
        assert params.warnings == [STATUS_DEFAULT_WARNING]

    def test_canonical_case(self):
        params = VulnerabilitySearchParams.of("app-1", statuses="fixed,notaproblem")

        assert params.statuses == ["Fixed", "NotAProblem"]
        assert params.warnings == []

    def test_invalid_status_lists_every_valid_value(self):
        params = VulnerabilitySearchParams.of("app-1", statuses="Open")

        assert params.errors == [
            "Invalid statuses: 'Open'. Valid values: AutoRemediated, Confirmed, Fixed, "
            "NotAProblem, Remediated, Reported, Suspicious"
        ]


class TestEnumSets:
    def test_severities_and_environments(self):
        params = VulnerabilitySearchParams.of(
            "app-1", severities="critical,High", environments="production"
        )

        assert params.severities == frozenset({Severity.CRITICAL, Severity.HIGH})
        assert params.environments == frozenset({Environment.PRODUCTION})

    def test_invalid_severity(self):
        params = VulnerabilitySearchParams.of("app-1", severities="SEVERE")

        assert params.errors == [
            "Invalid severities: 'SEVERE'. Valid values: CRITICAL, HIGH, MEDIUM, LOW, NOTE"
        ]


class TestDates:
    def test_dates_add_time_filter_note(self):
        params = VulnerabilitySearchParams.of(
            "app-1", last_seen_after="2025-01-01", last_seen_before="1767225600000"
        )

        assert params.is_valid()
        assert params.last_seen_after == datetime(2025, 1, 1, tzinfo=UTC)
        assert params.last_seen_before == datetime(2026, 1, 1, tzinfo=UTC)
        assert TIME_FILTER_NOTE in params.warnings

    def test_inverted_range(self):
        params = VulnerabilitySearchParams.of(
            "app-1", last_seen_after="2025-12-31", last_seen_before="2025-01-01"
        )

        assert params.errors == [
            "Invalid date range: lastSeenAfter must be before lastSeenBefore. "
            "Example: lastSeenAfter='2025-01-01', lastSeenBefore='2025-12-31'"
        ]

    def test_no_dates_no_note(self):
        assert TIME_FILTER_NOTE not in VulnerabilitySearchParams.of("app-1").warnings


class TestMetadataAndSession:
    def test_metadata_filters(self):
        params = VulnerabilitySearchParams.of(
            "app-1", metadata_filters='{"branch": ["main", "dev"]}'
        )

        assert params.metadata_filters is not None
        assert params.metadata_filters[0].field_name == "branch"
        assert params.metadata_filters[0].values == ("main", "dev")

    def test_session_value_requires_name(self):
        params = VulnerabilitySearchParams.of("app-1", session_metadata_value="main")

        assert params.errors == [
            "sessionMetadataValue requires sessionMetadataName to be specified"
        ]

    def test_session_filtering_needed(self):
        by_name = VulnerabilitySearchParams.of("a", session_metadata_name="branch")
        latest = VulnerabilitySearchParams.of("a", use_latest_session=True)

        assert by_name.needs_session_filtering()
        assert latest.needs_session_filtering()
        assert not VulnerabilitySearchParams.of("a").needs_session_filtering()


class TestAggregation:
    def test_every_violation_is_reported_together(self):
        params = VulnerabilitySearchParams.of(
            None,
            severities="SEVERE",
            statuses="Open,Closed",
            last_seen_after="yesterday",
            metadata_filters='{"branch": []}',
            session_metadata_value="x",
        )

        assert len(params.errors) == 7
        assert params.errors[0] == "appId is required"

    def test_params_never_raise_for_bad_user_input(self):
        try:
            VulnerabilitySearchParams.of("", severities=",,", metadata_filters="{not json")
        except CallerContractError:
            pytest.fail("user input must never raise")


class TestSearchVulnerabilitiesTool:
    def test_oversized_metadata_number_becomes_validation_error(self, settings):
        repository = Mock()
        tool = SearchVulnerabilitiesTool(repository, settings)

        response = tool.run("app-1", metadata_filters='{"build": ' + "9" * 5000 + "}")

        assert response.is_success() is False
        assert len(response.errors) == 1
        assert response.errors[0].startswith("Invalid JSON for metadataFilters: number too large.")
        repository.search_vulnerabilities.assert_not_called()
