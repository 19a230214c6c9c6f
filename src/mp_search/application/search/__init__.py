"""Application search – declarative filtered/sorted/paged search."""
from mp_search.application.search.capabilities import (
    DEFAULT_CAPABILITIES,
    CapabilityTable,
    OperatorCapability,
)
from mp_search.application.search.coercion import DEFAULT_REGISTRY, CoercionRegistry, TypedValue
from mp_search.application.search.discovery import (
    Attribute,
    Cardinality,
    DeclaredMetadataSource,
    FieldDiscoverer,
    MetadataSource,
    RegistryMetadataSource,
)
from mp_search.application.search.executor import (
    AsyncQueryExecutor,
    InMemoryQueryExecutor,
    QueryExecutor,
)
from mp_search.application.search.fields import Catalogue, SearchField
from mp_search.application.search.plan import (
    Condition,
    FieldRef,
    Ordering,
    Projection,
    QueryPlan,
    QueryPlanBuilder,
    TraversalCache,
    TraversalNode,
)
from mp_search.application.search.query import Filter, SearchRequest, Sort
from mp_search.application.search.result import SearchResponse
from mp_search.application.search.semantics import FilterOperator, SemanticType, SortDirection
from mp_search.application.search.service import AsyncSearchService, SearchService
from mp_search.application.search.validator import RequestValidator

__all__ = [
    "DEFAULT_CAPABILITIES",
    "DEFAULT_REGISTRY",
    "AsyncQueryExecutor",
    "AsyncSearchService",
    "Attribute",
    "CapabilityTable",
    "Cardinality",
    "Catalogue",
    "CoercionRegistry",
    "Condition",
    "DeclaredMetadataSource",
    "FieldDiscoverer",
    "FieldRef",
    "Filter",
    "FilterOperator",
    "InMemoryQueryExecutor",
    "MetadataSource",
    "OperatorCapability",
    "Ordering",
    "Projection",
    "QueryExecutor",
    "QueryPlan",
    "QueryPlanBuilder",
    "RegistryMetadataSource",
    "RequestValidator",
    "SearchField",
    "SearchRequest",
    "SearchResponse",
    "SearchService",
    "SemanticType",
    "Sort",
    "SortDirection",
    "TraversalCache",
    "TraversalNode",
    "TypedValue",
]
