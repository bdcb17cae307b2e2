from tool_params.schemas.common import ExecutionResult, PaginatedToolResponse, ToolResponse
from tool_params.schemas.records import ApplicationSummary, AttackSummary, VulnerabilitySummary

__all__ = [
    "ApplicationSummary",
    "AttackSummary",
    "ExecutionResult",
    "PaginatedToolResponse",
    "ToolResponse",
    "VulnerabilitySummary",
]
