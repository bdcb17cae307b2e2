from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class PaginatedToolResponse(BaseModel, Generic[T]):
    """
    Envelope returned by every paginated search tool.

    ``errors`` lists what the caller must fix before retrying; ``warnings`` lists
    defaults, clamps and notices that did not stop the call. When ``errors`` is
    non-empty, ``items`` is empty and ``total_items`` is 0.
    """

    items: tuple[T, ...] = ()
    page: int
    page_size: int
    total_items: int | None = None
    has_more_pages: bool = False
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    duration_ms: int | None = None

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    def is_success(self) -> bool:
        return not self.errors

    @classmethod
    def success(
        cls,
        items: Sequence[T],
        page: int,
        page_size: int,
        total_items: int | None,
        has_more_pages: bool,
        warnings: Iterable[str] = (),
        duration_ms: int | None = None,
    ) -> PaginatedToolResponse[T]:
        return cls(
            items=tuple(items),
            page=page,
            page_size=page_size,
            total_items=total_items,
            has_more_pages=has_more_pages,
            warnings=tuple(warnings),
            duration_ms=duration_ms,
        )

    @classmethod
    def validation_error(
        cls,
        page: int,
        page_size: int,
        errors: Iterable[str],
        warnings: Iterable[str] = (),
    ) -> PaginatedToolResponse[T]:
        return cls(
            page=page,
            page_size=page_size,
            total_items=0,
            errors=tuple(errors),
            warnings=tuple(warnings),
        )

    @classmethod
    def error(
        cls,
        page: int,
        page_size: int,
        message: str,
        warnings: Iterable[str] = (),
        duration_ms: int | None = None,
    ) -> PaginatedToolResponse[T]:
        return cls(
            page=page,
            page_size=page_size,
            total_items=0,
            errors=(message,),
            warnings=tuple(warnings),
            duration_ms=duration_ms,
        )


class ToolResponse(BaseModel, Generic[T]):
    """
    Envelope returned by single-item lookup tools.

    A missing resource is not an error: ``found`` is False and the reason is
    appended to ``warnings``.
    """

    data: T | None = None
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    found: bool = False

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    def is_success(self) -> bool:
        return not self.errors

    @classmethod
    def success(cls, data: T, warnings: Iterable[str] = ()) -> ToolResponse[T]:
        return cls(data=data, warnings=tuple(warnings), found=True)

    @classmethod
    def not_found(cls, message: str, warnings: Iterable[str] = ()) -> ToolResponse[T]:
        return cls(warnings=(*warnings, message), found=False)

    @classmethod
    def error(cls, message: str, warnings: Iterable[str] = ()) -> ToolResponse[T]:
        return cls(errors=(message,), warnings=tuple(warnings))

    @classmethod
    def validation_error(
        cls, errors: Iterable[str], warnings: Iterable[str] = ()
    ) -> ToolResponse[T]:
        return cls(errors=tuple(errors), warnings=tuple(warnings))


class ExecutionResult(BaseModel, Generic[T]):
    """One page of items from a data-fetch collaborator, plus the exact total when known."""

    items: tuple[T, ...] = ()
    total_items: int | None = Field(default=None, ge=0)

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    @classmethod
    def of(cls, items: Sequence[T], total_items: int | None = None) -> ExecutionResult[T]:
        return cls(items=tuple(items), total_items=total_items)

    @classmethod
    def empty(cls) -> ExecutionResult[T]:
        return cls(total_items=0)
