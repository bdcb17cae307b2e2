"""Vulnerability search scoped to one application."""

from __future__ import annotations

import enum
from datetime import datetime

from tool_params.pagination import PaginationParams
from tool_params.schemas.common import ExecutionResult, PaginatedToolResponse
from tool_params.schemas.records import VulnerabilitySummary
from tool_params.settings import ToolParamsSettings
from tool_params.tools.base import BaseToolParams, PaginatedTool, ToolMetadata
from tool_params.tools.repositories import VulnerabilityRepository
from tool_params.validation.constants import DEFAULT_VULN_STATUSES, VALID_VULN_STATUSES
from tool_params.validation.context import ToolValidationContext
from tool_params.validation.metadata_filter import UnresolvedMetadataFilter


class Severity(enum.StrEnum):
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    NOTE = "NOTE"


class Environment(enum.StrEnum):
    DEVELOPMENT = "DEVELOPMENT"
    QA = "QA"
    PRODUCTION = "PRODUCTION"


class VulnerabilitySearchParams(BaseToolParams):
    def __init__(self) -> None:
        super().__init__()
        self.app_id: str | None = None
        self.severities: frozenset[Severity] | None = None
        self.statuses: list[str] | None = None
        self.vuln_types: list[str] | None = None
        self.environments: frozenset[Environment] | None = None
        self.last_seen_after: datetime | None = None
        self.last_seen_before: datetime | None = None
        self.vuln_tags: list[str] | None = None
        self.metadata_filters: list[UnresolvedMetadataFilter] | None = None
        self.session_metadata_name: str | None = None
        self.session_metadata_value: str | None = None
        self.use_latest_session: bool | None = None

    @classmethod
    def of(
        cls,
        app_id: str | None,
        severities: str | None = None,
        statuses: str | None = None,
        vuln_types: str | None = None,
        environments: str | None = None,
        last_seen_after: str | None = None,
        last_seen_before: str | None = None,
        vuln_tags: str | None = None,
        metadata_filters: str | None = None,
        session_metadata_name: str | None = None,
        session_metadata_value: str | None = None,
        use_latest_session: bool | None = None,
    ) -> VulnerabilitySearchParams:
        params = cls()
        ctx = ToolValidationContext()

        ctx.require(app_id, "appId")
        params.app_id = app_id.strip() if app_id is not None and app_id.strip() else None

        params.severities = ctx.enum_set_param(severities, Severity, "severities").resolve()
        params.statuses = (
            ctx.string_list_param(statuses, "statuses")
            .allowed_values(VALID_VULN_STATUSES)
            .default_to(
                list(DEFAULT_VULN_STATUSES),
                "Showing actionable vulnerabilities only (excluding Fixed and Remediated). "
                "To see all statuses, specify statuses parameter explicitly.",
            )
            .resolve()
        )
        params.vuln_types = ctx.string_list_param(vuln_types, "vulnTypes").resolve()
        params.environments = ctx.enum_set_param(
            environments, Environment, "environments"
        ).resolve()

        params.last_seen_after = ctx.date_param(last_seen_after, "lastSeenAfter").resolve()
        params.last_seen_before = ctx.date_param(last_seen_before, "lastSeenBefore").resolve()
        ctx.validate_date_range(
            params.last_seen_after, params.last_seen_before, "lastSeenAfter", "lastSeenBefore"
        )
        ctx.warn_if(
            params.last_seen_after is not None or params.last_seen_before is not None,
            "Time filters apply to LAST ACTIVITY DATE (lastTimeSeen), not discovery date.",
        )

        params.vuln_tags = ctx.string_list_param(vuln_tags, "vulnTags").resolve()
        params.metadata_filters = ctx.metadata_json_filter_param(
            metadata_filters, "metadataFilters"
        ).resolve()

        params.session_metadata_name = ctx.string_param(
            session_metadata_name, "sessionMetadataName"
        ).resolve()
        params.session_metadata_value = ctx.string_param(
            session_metadata_value, "sessionMetadataValue"
        ).resolve()
        params.use_latest_session = use_latest_session
        ctx.require_if_present(
            session_metadata_value,
            "sessionMetadataValue",
            session_metadata_name,
            "sessionMetadataName",
        )

        params.set_validation_result(ctx)
        return params

    def needs_session_filtering(self) -> bool:
        return self.use_latest_session is True or self.session_metadata_name is not None


class SearchVulnerabilitiesTool(PaginatedTool[VulnerabilitySearchParams, VulnerabilitySummary]):
    def __init__(
        self, repository: VulnerabilityRepository, settings: ToolParamsSettings | None = None
    ) -> None:
        self._repository = repository
        super().__init__(settings)

    def get_metadata(self) -> ToolMetadata:
        return ToolMetadata(
            name="search_app_vulnerabilities",
            description=(
                "Search vulnerabilities of one application (appId is required). Filter by "
                "comma-separated severities, statuses, vulnTypes, environments and vulnTags, "
                "last activity dates (YYYY-MM-DD or epoch milliseconds), a JSON object of "
                "metadataFilters, or session metadata."
            ),
            category="assess",
        )

    def do_execute(
        self,
        pagination: PaginationParams,
        params: VulnerabilitySearchParams,
        warnings: list[str],
    ) -> ExecutionResult[VulnerabilitySummary]:
        return self._repository.search_vulnerabilities(
            params, pagination.offset, pagination.limit
        )

    def run(
        self,
        app_id: str | None,
        page: int | None = None,
        page_size: int | None = None,
        severities: str | None = None,
        statuses: str | None = None,
        vuln_types: str | None = None,
        environments: str | None = None,
        last_seen_after: str | None = None,
        last_seen_before: str | None = None,
        vuln_tags: str | None = None,
        metadata_filters: str | None = None,
        session_metadata_name: str | None = None,
        session_metadata_value: str | None = None,
        use_latest_session: bool | None = None,
    ) -> PaginatedToolResponse[VulnerabilitySummary]:
        return self.execute_pipeline(
            page,
            page_size,
            lambda: VulnerabilitySearchParams.of(
                app_id,
                severities=severities,
                statuses=statuses,
                vuln_types=vuln_types,
                environments=environments,
                last_seen_after=last_seen_after,
                last_seen_before=last_seen_before,
                vuln_tags=vuln_tags,
                metadata_filters=metadata_filters,
                session_metadata_name=session_metadata_name,
                session_metadata_value=session_metadata_value,
                use_latest_session=use_latest_session,
            ),
        )
