from tool_params.tools.applications import (
    ApplicationFilterParams,
    ApplicationLookupParams,
    GetApplicationTool,
    SearchApplicationsTool,
)
from tool_params.tools.attacks import AttackFilterParams, SearchAttacksTool
from tool_params.tools.base import (
    BaseGetTool,
    BaseTool,
    BaseToolParams,
    PaginatedTool,
    ToolMetadata,
    map_http_error_code,
)
from tool_params.tools.repositories import (
    ApplicationRepository,
    AttackRepository,
    VulnerabilityRepository,
)
from tool_params.tools.vulnerabilities import (
    Environment,
    SearchVulnerabilitiesTool,
    Severity,
    VulnerabilitySearchParams,
)

__all__ = [
    "ApplicationFilterParams",
    "ApplicationLookupParams",
    "ApplicationRepository",
    "AttackFilterParams",
    "AttackRepository",
    "BaseGetTool",
    "BaseTool",
    "BaseToolParams",
    "Environment",
    "GetApplicationTool",
    "PaginatedTool",
    "SearchApplicationsTool",
    "SearchAttacksTool",
    "SearchVulnerabilitiesTool",
    "Severity",
    "ToolMetadata",
    "VulnerabilityRepository",
    "VulnerabilitySearchParams",
    "map_http_error_code",
]
