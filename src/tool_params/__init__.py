"""Request-parameter validation and pagination for agent-facing search tools."""

from tool_params.exceptions import (
    CallerContractError,
    ResourceNotFoundError,
    ToolParamsError,
    UnauthorizedError,
    UpstreamServiceError,
)
from tool_params.pagination import PaginationParams, build_paginated_response
from tool_params.schemas import ExecutionResult, PaginatedToolResponse, ToolResponse
from tool_params.settings import (
    ToolParamsSettings,
    configure_logging_from_settings,
    get_settings,
    load_settings,
)
from tool_params.validation import ToolValidationContext, UnresolvedMetadataFilter

__version__ = "0.1.0"

__all__ = [
    "CallerContractError",
    "ExecutionResult",
    "PaginatedToolResponse",
    "PaginationParams",
    "ResourceNotFoundError",
    "ToolParamsError",
    "ToolParamsSettings",
    "ToolResponse",
    "ToolValidationContext",
    "UnauthorizedError",
    "UnresolvedMetadataFilter",
    "UpstreamServiceError",
    "build_paginated_response",
    "configure_logging_from_settings",
    "get_settings",
    "load_settings",
]
