"""Application search – SearchResponse generic container."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Sequence, TypeVar

from mp_search.application.search.query import SearchRequest

T = TypeVar("T")

__all__ = ["SearchResponse"]


@dataclass
class SearchResponse(Generic[T]):
    """One page of search results.

    ``total_count`` is ``None`` when the caller asked to skip totals
    (``with_totals=False``); the page navigation properties are then
    ``None`` as well.
    """

    page: int
    page_size: int
    returned_count: int
    total_count: int | None
    data: list[T] = field(default_factory=list)

    @property
    def total_pages(self) -> int | None:
        if self.total_count is None:
            return None
        if self.page_size <= 0 or self.total_count <= 0:
            return 0
        return (self.total_count + self.page_size - 1) // self.page_size

    @property
    def has_next(self) -> bool | None:
        total_pages = self.total_pages
        if total_pages is None:
            return None
        return self.page < total_pages

    @classmethod
    def assemble(
        cls,
        request: SearchRequest,
        rows: Sequence[Any],
        total_count: int | None,
        transform: Callable[[Any], T] | None = None,
    ) -> "SearchResponse[T]":
        """Package fetched *rows*, mapping each through *transform* when given."""
        data = [transform(row) for row in rows] if transform is not None else list(rows)
        return cls(
            page=request.page,
            page_size=request.page_size,
            returned_count=len(rows),
            total_count=total_count,
            data=data,
        )
