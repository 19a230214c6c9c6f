"""Application search – SearchRequest value object."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from mp_search.application.search.semantics import FilterOperator, SortDirection

__all__ = ["Filter", "SearchRequest", "Sort"]


@dataclass(frozen=True)
class Filter:
    """A field-level filter; ``values`` are raw strings coerced per field type.

    A single string is accepted as shorthand for a one-element ``values``.
    """
    field: str
    operator: FilterOperator
    values: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "operator", FilterOperator(self.operator))
        values: str | Iterable[str] | None = self.values
        if values is None:
            values = ()
        elif isinstance(values, str):
            values = (values,)
        object.__setattr__(self, "values", tuple(values))


@dataclass(frozen=True)
class Sort:
    field: str
    direction: SortDirection = SortDirection.ASC

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", SortDirection(self.direction))


@dataclass(frozen=True)
class SearchRequest:
    page: int = 1
    page_size: int = 20
    sorts: tuple[Sort, ...] = field(default_factory=tuple)
    filters: tuple[Filter, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "sorts", tuple(self.sorts or ()))
        object.__setattr__(self, "filters", tuple(self.filters or ()))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size
