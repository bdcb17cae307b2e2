"""
Base classes for agent-facing tools.

Every tool call runs through the same pipeline:

1. normalize pagination (paginated tools only, never fails)
2. build the tool's params from raw input, collecting every error and warning
3. stop at the validity gate, before any data is fetched
4. run the tool-specific ``do_execute``
5. wrap the outcome (or a translated failure) in a response envelope

Example:
    ```python
    class SearchWidgetsTool(PaginatedTool[WidgetParams, Widget]):
        def get_metadata(self) -> ToolMetadata:
            return ToolMetadata(name="search_widgets", description="...", category="search")

        def do_execute(self, pagination, params, warnings):
            return self._repository.search(params, pagination.offset, pagination.limit)

        def run(self, page=None, page_size=None, color=None):
            return self.execute_pipeline(page, page_size, lambda: WidgetParams.of(color))
    ```
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Generic, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, Field

from tool_params.exceptions import (
    CallerContractError,
    ResourceNotFoundError,
    UnauthorizedError,
    UpstreamServiceError,
)
from tool_params.logging import get_logger, request_context
from tool_params.pagination import PaginationParams, build_paginated_response
from tool_params.schemas.common import ExecutionResult, PaginatedToolResponse, ToolResponse
from tool_params.settings import ToolParamsSettings, get_settings
from tool_params.validation.context import ToolValidationContext

logger = get_logger(__name__)

P = TypeVar("P", bound="BaseToolParams")
R = TypeVar("R")

AUTHENTICATION_FAILED = "Authentication failed. Check API credentials."
NOT_FOUND_MESSAGE = "Resource not found"

HTTP_ERROR_MESSAGES: dict[int, str] = {
    401: (
        "Authentication failed or resource not found. "
        "Verify credentials and that the resource ID is correct."
    ),
    403: "Access denied. User lacks permission for this resource.",
    404: "Resource not found.",
    429: "Rate limit exceeded. Retry later.",
    500: "Upstream API error. Try again later.",
    502: "Upstream API error. Try again later.",
    503: "Upstream API error. Try again later.",
}


def map_http_error_code(status_code: int) -> str:
    """User-facing message for an HTTP error answered by the backing API."""
    return HTTP_ERROR_MESSAGES.get(status_code, f"API error (HTTP {status_code})")


class ToolMetadata(BaseModel):
    """
    Describes a tool to the agent layer.

    Attributes:
        name: Unique identifier for the tool (snake_case)
        description: What the tool does and when to use it
        category: Tool category for filtering
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Unique tool identifier")
    description: str = Field(..., description="What the tool does")
    category: str = Field(default="search", description="Tool category")


class BaseToolParams:
    """
    Validated parameters of one tool call.

    Subclasses build themselves in an ``of(...)`` classmethod from a fresh
    :class:`ToolValidationContext` and finish with :meth:`set_validation_result`.
    """

    def __init__(self) -> None:
        self._errors: list[str] = []
        self._warnings: list[str] = []

    def set_validation_result(self, ctx: ToolValidationContext) -> None:
        self._errors = ctx.errors
        self._warnings = ctx.warnings

    def is_valid(self) -> bool:
        return not self._errors

    @property
    def errors(self) -> list[str]:
        return list(self._errors)

    @property
    def warnings(self) -> list[str]:
        return list(self._warnings)


class BaseTool(ABC):
    """Shared metadata, settings and failure translation for every tool."""

    def __init__(self, settings: ToolParamsSettings | None = None) -> None:
        self._settings = settings
        self.metadata = self.get_metadata()
        logger.debug("tool_initialized", tool=self.metadata.name, category=self.metadata.category)

    @abstractmethod
    def get_metadata(self) -> ToolMetadata:
        """Return the tool's name, description and category."""

    @property
    def settings(self) -> ToolParamsSettings:
        return self._settings if self._settings is not None else get_settings()

    def _failure_message(self, exc: Exception) -> str:
        """Log a failed ``do_execute`` and translate it into a caller-facing error."""
        match exc:
            case UnauthorizedError():
                self._log_failure(exc)
                return AUTHENTICATION_FAILED
            case ResourceNotFoundError():
                self._log_failure(exc)
                return f"Resource not found: {exc.message}"
            case UpstreamServiceError():
                return self._log_http_failure(exc.status_code, exc)
            case httpx.HTTPStatusError():
                return self._log_http_failure(exc.response.status_code, exc)
            case _:
                logger.error(
                    "tool_execution_error",
                    tool=self.metadata.name,
                    error=str(exc),
                    error_type=type(exc).__name__,
                    exc_info=True,
                )
                return f"Internal error: {exc}"

    def _log_failure(self, exc: Exception) -> None:
        logger.warning(
            "tool_execution_failed",
            tool=self.metadata.name,
            exception_type=type(exc).__name__,
            error=str(exc),
        )

    def _log_http_failure(self, status_code: int, exc: Exception) -> str:
        logger.warning(
            "tool_upstream_http_error",
            tool=self.metadata.name,
            status_code=status_code,
            error=str(exc),
        )
        return map_http_error_code(status_code)

    def _log_validation_failure(self, errors: list[str]) -> None:
        logger.debug(
            "tool_validation_failed",
            tool=self.metadata.name,
            error_count=len(errors),
            errors=errors,
        )


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class PaginatedTool(BaseTool, Generic[P, R]):
    """
    Base class for search tools returning a :class:`PaginatedToolResponse`.

    ``max_page_size`` lowers the configured maximum for tools whose backing API
    accepts smaller pages.
    """

    max_page_size: int | None = None

    @abstractmethod
    def do_execute(
        self, pagination: PaginationParams, params: P, warnings: list[str]
    ) -> ExecutionResult[R]:
        """
        Fetch one page of results.

        Args:
            pagination: Normalized page bounds (use ``offset`` / ``limit``)
            params: Validated tool params
            warnings: Mutable list; append execution-time warnings here

        Returns:
            The page of items, plus the exact total when the backing store reports one
        """

    def pagination_for(self, page: int | None, page_size: int | None) -> PaginationParams:
        configured = self.settings.pagination
        max_size = configured.max_page_size
        if self.max_page_size is not None:
            max_size = min(max_size, self.max_page_size)
        return PaginationParams.of(
            page,
            page_size,
            max_page_size=max_size,
            default_page_size=min(configured.default_page_size, max_size),
        )

    def execute_pipeline(
        self,
        page: int | None,
        page_size: int | None,
        params_factory: Callable[[], P],
    ) -> PaginatedToolResponse[R]:
        with request_context(tool=self.metadata.name):
            start = time.perf_counter()

            pagination = self.pagination_for(page, page_size)
            params = params_factory()

            if not params.is_valid():
                self._log_validation_failure(params.errors)
                return PaginatedToolResponse.validation_error(
                    pagination.page,
                    pagination.page_size,
                    params.errors,
                    [*pagination.warnings, *params.warnings],
                )

            warnings = params.warnings
            try:
                result = self.do_execute(pagination, params, warnings)
            except CallerContractError:
                raise
            except Exception as exc:
                return PaginatedToolResponse.error(
                    pagination.page,
                    pagination.page_size,
                    self._failure_message(exc),
                    [*pagination.warnings, *warnings],
                    duration_ms=_elapsed_ms(start),
                )

            duration_ms = _elapsed_ms(start)
            logger.debug(
                "tool_execution_success",
                tool=self.metadata.name,
                duration_ms=duration_ms,
                item_count=len(result.items),
                total_items=result.total_items,
            )
            return build_paginated_response(
                result.items,
                pagination,
                total_items=result.total_items,
                additional_warnings=warnings,
                duration_ms=duration_ms,
            )


class BaseGetTool(BaseTool, Generic[P, R]):
    """Base class for single-item lookups returning a :class:`ToolResponse`."""

    @abstractmethod
    def do_execute(self, params: P, warnings: list[str]) -> R | None:
        """Fetch the item, or return ``None`` when it does not exist."""

    def execute_pipeline(self, params_factory: Callable[[], P]) -> ToolResponse[R]:
        with request_context(tool=self.metadata.name):
            start = time.perf_counter()
            params = params_factory()

            if not params.is_valid():
                self._log_validation_failure(params.errors)
                return ToolResponse.validation_error(params.errors, params.warnings)

            warnings = params.warnings
            try:
                result = self.do_execute(params, warnings)
            except CallerContractError:
                raise
            except Exception as exc:
                return ToolResponse.error(self._failure_message(exc), warnings)

            duration_ms = _elapsed_ms(start)
            if result is None:
                logger.debug(
                    "tool_resource_not_found", tool=self.metadata.name, duration_ms=duration_ms
                )
                return ToolResponse.not_found(NOT_FOUND_MESSAGE, warnings)

            logger.debug("tool_execution_success", tool=self.metadata.name, duration_ms=duration_ms)
            return ToolResponse.success(result, warnings)
