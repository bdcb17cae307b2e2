"""Attack search with quick filters, status filters and a smart suppression default."""

from __future__ import annotations

import re

from tool_params.pagination import PaginationParams
from tool_params.schemas.common import ExecutionResult, PaginatedToolResponse
from tool_params.schemas.records import AttackSummary
from tool_params.settings import ToolParamsSettings
from tool_params.tools.base import BaseToolParams, PaginatedTool, ToolMetadata
from tool_params.tools.repositories import AttackRepository
from tool_params.validation.constants import SORT_PATTERN
from tool_params.validation.context import ToolValidationContext

VALID_QUICK_FILTERS = frozenset(
    {"ALL", "ACTIVE", "MANUAL", "AUTOMATED", "PRODUCTION", "EFFECTIVE"}
)
VALID_STATUS_FILTERS = frozenset(
    {"EXPLOITED", "PROBED", "BLOCKED", "BLOCKED_PERIMETER", "PROBED_PERIMETER", "SUSPICIOUS"}
)

_SORT_RE = re.compile(SORT_PATTERN)


class AttackFilterParams(BaseToolParams):
    def __init__(self) -> None:
        super().__init__()
        self.quick_filter: str | None = None
        self.status_filters: list[str] | None = None
        self.keyword: str | None = None
        self.include_suppressed: bool = False
        self.include_bot_blockers: bool | None = None
        self.include_ip_blacklist: bool | None = None
        self.sort: str | None = None

    @classmethod
    def of(
        cls,
        quick_filter: str | None = None,
        status_filter: str | None = None,
        keyword: str | None = None,
        include_suppressed: bool | None = None,
        include_bot_blockers: bool | None = None,
        include_ip_blacklist: bool | None = None,
        sort: str | None = None,
    ) -> AttackFilterParams:
        params = cls()
        ctx = ToolValidationContext()

        params.quick_filter = (
            ctx.string_param(quick_filter, "quickFilter")
            .to_upper_case()
            .allowed_values(VALID_QUICK_FILTERS)
            .default_to("ALL", "No quickFilter applied - showing all attack types")
            .resolve()
        )
        params.status_filters = (
            ctx.string_list_param(status_filter, "statusFilter")
            .to_upper_case()
            .allowed_values(VALID_STATUS_FILTERS)
            .resolve()
        )
        params.keyword = ctx.string_param(keyword, "keyword").resolve()

        if include_suppressed is None:
            params.include_suppressed = False
            ctx.add_warning(
                "Excluding suppressed attacks by default. "
                "To see all attacks including suppressed, set includeSuppressed=true."
            )
        else:
            params.include_suppressed = include_suppressed

        params.include_bot_blockers = include_bot_blockers
        params.include_ip_blacklist = include_ip_blacklist

        if sort is not None and sort.strip():
            trimmed = sort.strip()
            if _SORT_RE.match(trimmed):
                params.sort = trimmed
            else:
                ctx.add_error(
                    f"Invalid sort format '{sort}'. Must be a field name with optional '-' prefix "
                    f"for descending. Example: 'severity' or '-severity'"
                )

        params.set_validation_result(ctx)
        return params

    def to_filter_body(self) -> dict[str, object]:
        """Request body for the attack search API; unset filters are omitted."""
        body: dict[str, object] = {"includeSuppressed": self.include_suppressed}
        if self.quick_filter is not None:
            body["quickFilter"] = self.quick_filter
        if self.status_filters:
            body["statusFilter"] = list(self.status_filters)
        if self.keyword is not None:
            body["keyword"] = self.keyword
        if self.include_bot_blockers is not None:
            body["includeBotBlockers"] = self.include_bot_blockers
        if self.include_ip_blacklist is not None:
            body["includeIpBlacklist"] = self.include_ip_blacklist
        return body


class SearchAttacksTool(PaginatedTool[AttackFilterParams, AttackSummary]):
    def __init__(
        self, repository: AttackRepository, settings: ToolParamsSettings | None = None
    ) -> None:
        self._repository = repository
        super().__init__(settings)

    def get_metadata(self) -> ToolMetadata:
        return ToolMetadata(
            name="search_attacks",
            description=(
                "Search attacks detected across the organization. Filter by quickFilter "
                "(ALL, ACTIVE, MANUAL, AUTOMATED, PRODUCTION, EFFECTIVE), comma-separated "
                "statusFilter, keyword, and suppression/bot-blocker/IP-blacklist flags. "
                "Sort with a field name, prefixed with '-' for descending."
            ),
            category="protect",
        )

    def do_execute(
        self, pagination: PaginationParams, params: AttackFilterParams, warnings: list[str]
    ) -> ExecutionResult[AttackSummary]:
        return self._repository.search_attacks(params, pagination.offset, pagination.limit)

    def run(
        self,
        page: int | None = None,
        page_size: int | None = None,
        quick_filter: str | None = None,
        status_filter: str | None = None,
        keyword: str | None = None,
        include_suppressed: bool | None = None,
        include_bot_blockers: bool | None = None,
        include_ip_blacklist: bool | None = None,
        sort: str | None = None,
    ) -> PaginatedToolResponse[AttackSummary]:
        return self.execute_pipeline(
            page,
            page_size,
            lambda: AttackFilterParams.of(
                quick_filter=quick_filter,
                status_filter=status_filter,
                keyword=keyword,
                include_suppressed=include_suppressed,
                include_bot_blockers=include_bot_blockers,
                include_ip_blacklist=include_ip_blacklist,
                sort=sort,
            ),
        )
