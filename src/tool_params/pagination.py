"""
Pagination normalization and paginated response assembly.

:meth:`PaginationParams.of` never fails: every correction it makes to the raw
``page`` / ``page_size`` pair is paired with a warning. :func:`build_paginated_response`
combines one page of items with those params into a :class:`PaginatedToolResponse`.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field

from tool_params.exceptions import CallerContractError
from tool_params.schemas.common import PaginatedToolResponse
from tool_params.validation.constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    MIN_PAGE,
)

T = TypeVar("T")

ESTIMATED_HAS_MORE_WARNING = (
    "Total count unavailable: hasMorePages is estimated from page fullness "
    "(a full page suggests more results may follow)."
)


class PaginationParams(BaseModel):
    """Always-valid page bounds with the derived offset/limit for the data fetch."""

    page: int = Field(ge=MIN_PAGE)
    page_size: int = Field(ge=1, le=MAX_PAGE_SIZE)
    offset: int = Field(ge=0)
    limit: int = Field(ge=1, le=MAX_PAGE_SIZE)
    warnings: tuple[str, ...] = ()

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def of(
        cls,
        page: int | None,
        page_size: int | None,
        max_page_size: int = MAX_PAGE_SIZE,
        default_page_size: int = DEFAULT_PAGE_SIZE,
    ) -> PaginationParams:
        """
        Normalize a raw (page, page_size) pair.

        Args:
            page: Requested 1-based page, ``None`` for the first page
            page_size: Requested page size, ``None`` for ``default_page_size``
            max_page_size: Upper bound for this tool (at most 100)
            default_page_size: Size substituted when absent or not positive

        Absent values take their defaults silently; out-of-range values are
        clamped with a warning naming the original value.
        """
        if not 1 <= max_page_size <= MAX_PAGE_SIZE:
            raise CallerContractError(
                f"max_page_size must be between 1 and {MAX_PAGE_SIZE}, got {max_page_size}"
            )
        if not 1 <= default_page_size <= max_page_size:
            raise CallerContractError(
                f"default_page_size must be between 1 and {max_page_size}, got {default_page_size}"
            )

        warnings: list[str] = []

        actual_page = DEFAULT_PAGE if page is None else page
        if actual_page < MIN_PAGE:
            warnings.append(f"Invalid page number {page}, using page {DEFAULT_PAGE}")
            actual_page = DEFAULT_PAGE

        actual_size = default_page_size if page_size is None else page_size
        if actual_size < 1:
            warnings.append(f"Invalid pageSize {page_size}, using default {default_page_size}")
            actual_size = default_page_size
        elif actual_size > max_page_size:
            warnings.append(
                f"Requested pageSize {page_size} exceeds maximum {max_page_size}, "
                f"capped to {max_page_size}"
            )
            actual_size = max_page_size

        return cls(
            page=actual_page,
            page_size=actual_size,
            offset=(actual_page - 1) * actual_size,
            limit=actual_size,
            warnings=tuple(warnings),
        )


def calculate_has_more_pages(
    pagination: PaginationParams, total_items: int | None, items_returned: int
) -> bool:
    """Exact when the total is known; otherwise a full page is taken to mean more may follow."""
    if total_items is not None:
        return pagination.page * pagination.page_size < total_items
    return items_returned == pagination.page_size


def empty_result_message(
    item_count: int, pagination: PaginationParams, total_items: int | None
) -> str | None:
    if item_count:
        return None
    if pagination.page == 1:
        return "No items found."
    if total_items is not None:
        total_pages = math.ceil(total_items / pagination.page_size)
        return f"Requested page {pagination.page} exceeds available pages (total: {total_pages})."
    return f"Requested page {pagination.page} returned no results."


def build_paginated_response(
    items: Sequence[T],
    pagination: PaginationParams,
    total_items: int | None = None,
    additional_warnings: Iterable[str] = (),
    duration_ms: int | None = None,
) -> PaginatedToolResponse[T]:
    """
    Assemble the success envelope for one page of results.

    Warnings are ordered: pagination corrections, then ``additional_warnings``,
    then notices about the result itself (empty page, estimated page count).
    """
    warnings = [*pagination.warnings, *additional_warnings]

    message = empty_result_message(len(items), pagination, total_items)
    if message is not None:
        warnings.append(message)
    elif total_items is None:
        warnings.append(ESTIMATED_HAS_MORE_WARNING)

    return PaginatedToolResponse.success(
        items=items,
        page=pagination.page,
        page_size=pagination.page_size,
        total_items=total_items,
        has_more_pages=calculate_has_more_pages(pagination, total_items, len(items)),
        warnings=warnings,
        duration_ms=duration_ms,
    )
