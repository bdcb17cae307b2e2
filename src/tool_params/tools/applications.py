"""
Application search and lookup.

The application catalog is small, so search fetches it once and filters and
pages in memory. Metadata filters are resolved against each application's own
metadata names, case-insensitively.
"""

from __future__ import annotations

from tool_params.exceptions import require_identifier
from tool_params.pagination import PaginationParams
from tool_params.schemas.common import ExecutionResult, PaginatedToolResponse, ToolResponse
from tool_params.schemas.records import ApplicationSummary
from tool_params.settings import ToolParamsSettings
from tool_params.tools.base import BaseGetTool, BaseToolParams, PaginatedTool, ToolMetadata
from tool_params.tools.repositories import ApplicationRepository
from tool_params.validation.context import ToolValidationContext
from tool_params.validation.metadata_filter import UnresolvedMetadataFilter


class ApplicationFilterParams(BaseToolParams):
    def __init__(self) -> None:
        super().__init__()
        self.name: str | None = None
        self.tag: str | None = None
        self.metadata_filters: list[UnresolvedMetadataFilter] | None = None

    @classmethod
    def of(
        cls,
        name: str | None = None,
        tag: str | None = None,
        metadata_filters: str | None = None,
    ) -> ApplicationFilterParams:
        params = cls()
        ctx = ToolValidationContext()

        params.name = ctx.string_param(name, "name").resolve()
        params.tag = ctx.string_param(tag, "tag").resolve()
        params.metadata_filters = ctx.metadata_json_filter_param(
            metadata_filters, "metadataFilters"
        ).resolve()

        params.set_validation_result(ctx)
        return params

    def matches(self, app: ApplicationSummary) -> bool:
        return (
            self._matches_name(app) and self._matches_tag(app) and self._matches_metadata(app)
        )

    def _matches_name(self, app: ApplicationSummary) -> bool:
        if self.name is None:
            return True
        return self.name.lower() in app.name.lower()

    def _matches_tag(self, app: ApplicationSummary) -> bool:
        if self.tag is None:
            return True
        return self.tag in app.tags

    def _matches_metadata(self, app: ApplicationSummary) -> bool:
        if not self.metadata_filters:
            return True
        metadata = {field.lower(): value.lower() for field, value in app.metadata.items()}
        # Filters are ANDed; values within one filter are ORed.
        for metadata_filter in self.metadata_filters:
            value = metadata.get(metadata_filter.field_name.lower())
            if value is None:
                return False
            if value not in {candidate.lower() for candidate in metadata_filter.values}:
                return False
        return True


class ApplicationLookupParams(BaseToolParams):
    def __init__(self) -> None:
        super().__init__()
        self.app_id: str | None = None

    @classmethod
    def of(cls, app_id: str | None) -> ApplicationLookupParams:
        params = cls()
        ctx = ToolValidationContext()
        ctx.require_uuid(app_id, "appId")
        if ctx.is_valid() and app_id is not None:
            params.app_id = app_id.strip()
        params.set_validation_result(ctx)
        return params


class SearchApplicationsTool(PaginatedTool[ApplicationFilterParams, ApplicationSummary]):
    def __init__(
        self, repository: ApplicationRepository, settings: ToolParamsSettings | None = None
    ) -> None:
        self._repository = repository
        super().__init__(settings)

    def get_metadata(self) -> ToolMetadata:
        return ToolMetadata(
            name="search_applications",
            description=(
                "Search applications by partial name (case-insensitive), exact tag, or a JSON "
                'object of metadataFilters such as {"team":"payments"} or '
                '{"branch":["main","dev"]}.'
            ),
            category="applications",
        )

    def do_execute(
        self,
        pagination: PaginationParams,
        params: ApplicationFilterParams,
        warnings: list[str],
    ) -> ExecutionResult[ApplicationSummary]:
        matching = [app for app in self._repository.list_applications() if params.matches(app)]
        if not matching:
            return ExecutionResult.empty()
        page = matching[pagination.offset : pagination.offset + pagination.limit]
        return ExecutionResult.of(page, total_items=len(matching))

    def run(
        self,
        page: int | None = None,
        page_size: int | None = None,
        name: str | None = None,
        tag: str | None = None,
        metadata_filters: str | None = None,
    ) -> PaginatedToolResponse[ApplicationSummary]:
        return self.execute_pipeline(
            page,
            page_size,
            lambda: ApplicationFilterParams.of(
                name=name, tag=tag, metadata_filters=metadata_filters
            ),
        )


class GetApplicationTool(BaseGetTool[ApplicationLookupParams, ApplicationSummary]):
    def __init__(
        self, repository: ApplicationRepository, settings: ToolParamsSettings | None = None
    ) -> None:
        self._repository = repository
        super().__init__(settings)

    def get_metadata(self) -> ToolMetadata:
        return ToolMetadata(
            name="get_application",
            description="Get one application by its appId (UUID).",
            category="applications",
        )

    def do_execute(
        self, params: ApplicationLookupParams, warnings: list[str]
    ) -> ApplicationSummary | None:
        return self._repository.get_application(require_identifier(params.app_id, "appId"))

    def run(self, app_id: str | None) -> ToolResponse[ApplicationSummary]:
        return self.execute_pipeline(lambda: ApplicationLookupParams.of(app_id))
