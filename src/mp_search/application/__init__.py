"""Application – search engine use cases (framework-agnostic)."""

from mp_search.application.pagination import PageRequest
from mp_search.application.search import (
    Attribute,
    FieldDiscoverer,
    Filter,
    FilterOperator,
    InMemoryQueryExecutor,
    SearchField,
    SearchRequest,
    SearchResponse,
    SearchService,
    SemanticType,
    Sort,
    SortDirection,
)

__all__ = [
    "Attribute",
    "FieldDiscoverer",
    "Filter",
    "FilterOperator",
    "InMemoryQueryExecutor",
    "PageRequest",
    "SearchField",
    "SearchRequest",
    "SearchResponse",
    "SearchService",
    "SemanticType",
    "Sort",
    "SortDirection",
]
