"""Application search – QueryPlan and QueryPlanBuilder.

A :class:`QueryPlan` is the backend-neutral description of one query: the
relationship hops to join, the AND-ed conditions, the orderings, the
pagination window and whether root rows must be de-duplicated. Executors
(see :mod:`mp_search.application.search.executor`) translate it for their
backend; the plan itself never touches storage.
"""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, Iterable

from mp_search.application.pagination import PageRequest
from mp_search.application.search.coercion import DEFAULT_REGISTRY, CoercionRegistry, TypedValue
from mp_search.application.search.fields import Catalogue, SearchField
from mp_search.application.search.query import Filter, SearchRequest, Sort
from mp_search.application.search.semantics import FilterOperator, SemanticType, SortDirection
from mp_search.kernel.errors import InvariantViolationError
from mp_search.observability.logging import get_logger

__all__ = [
    "Condition",
    "FieldRef",
    "Ordering",
    "Projection",
    "QueryPlan",
    "QueryPlanBuilder",
    "TraversalCache",
    "TraversalNode",
]

_log = get_logger(__name__)

_COMPARISONS = frozenset(
    {
        FilterOperator.GREATER_THAN,
        FilterOperator.GREATER_THAN_OR_EQUAL,
        FilterOperator.LESS_THAN,
        FilterOperator.LESS_THAN_OR_EQUAL,
    }
)


class Projection(str, Enum):
    ROWS = "rows"
    COUNT = "count"


@dataclasses.dataclass(frozen=True)
class TraversalNode:
    """One relationship hop, identified by its full path prefix."""

    path: str
    attribute: str
    parent: TraversalNode | None = None

    @property
    def parent_path(self) -> str | None:
        return self.parent.path if self.parent is not None else None


@dataclasses.dataclass(frozen=True)
class FieldRef:
    """Where a field's value lives: ``attribute`` on ``node`` (``None`` = root).

    ``attribute`` is ``None`` for element collections, whose value is the
    joined element itself.
    """

    node: TraversalNode | None
    attribute: str | None
    field_id: str

    @property
    def path(self) -> str:
        parts = [self.node.path] if self.node is not None else []
        if self.attribute is not None:
            parts.append(self.attribute)
        return ".".join(parts)


@dataclasses.dataclass(frozen=True)
class Condition:
    operator: FilterOperator
    target: FieldRef
    values: tuple[Any, ...] = ()

    @property
    def value(self) -> Any:
        return self.values[0]


@dataclasses.dataclass(frozen=True)
class Ordering:
    target: FieldRef
    direction: SortDirection = SortDirection.ASC


@dataclasses.dataclass(frozen=True)
class QueryPlan:
    root_type: type
    conditions: tuple[Condition, ...] = ()
    orderings: tuple[Ordering, ...] = ()
    joins: tuple[TraversalNode, ...] = ()
    distinct_required: bool = False
    projection: Projection = Projection.ROWS
    page: PageRequest | None = None

    @property
    def offset(self) -> int:
        return self.page.offset if self.page is not None else 0

    @property
    def limit(self) -> int | None:
        return self.page.limit if self.page is not None else None


class TraversalCache:
    """Per-plan registry of relationship hops, keyed by path prefix.

    Every reference to the same prefix reuses one node, so a relationship is
    joined once no matter how many filters or sorts cross it.
    """

    def __init__(self) -> None:
        self._nodes: dict[str, TraversalNode] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, path: object) -> bool:
        return path in self._nodes

    @property
    def nodes(self) -> tuple[TraversalNode, ...]:
        """Nodes in creation order; a parent always precedes its children."""
        return tuple(self._nodes.values())

    def resolve(self, field: SearchField) -> FieldRef:
        *hops, leaf = field.segments
        node: TraversalNode | None = None
        for depth, attribute in enumerate(hops, start=1):
            node = self._node(".".join(hops[:depth]), attribute, node)
        if field.element_collection:
            return FieldRef(self._node(field.path, leaf, node), None, field.id)  # type: ignore[arg-type]
        return FieldRef(node, leaf, field.id)

    def _node(self, path: str, attribute: str, parent: TraversalNode | None) -> TraversalNode:
        node = self._nodes.get(path)
        if node is None:
            node = self._nodes[path] = TraversalNode(path, attribute, parent)
        return node


class QueryPlanBuilder:
    """Translate a validated request into row and count plans.

    The request must already have passed
    :class:`~mp_search.application.search.validator.RequestValidator`.
    """

    def __init__(self, registry: CoercionRegistry = DEFAULT_REGISTRY) -> None:
        self._registry = registry

    def build(self, request: SearchRequest, catalogue: Catalogue, root_type: type) -> QueryPlan:
        """Paged row plan: filters, sorts and the pagination window."""
        cache = TraversalCache()
        conditions, distinct = self._conditions(request.filters, catalogue, cache)
        orderings, sort_distinct = self._orderings(request.sorts, catalogue, cache)
        plan = QueryPlan(
            root_type=root_type,
            conditions=conditions,
            orderings=orderings,
            joins=cache.nodes,
            distinct_required=distinct or sort_distinct,
            projection=Projection.ROWS,
            page=PageRequest(request.page, request.page_size),
        )
        _log.debug(
            "search.plan_built",
            record_type=root_type,
            conditions=len(plan.conditions),
            orderings=len(plan.orderings),
            joins=[node.path for node in plan.joins],
            distinct=plan.distinct_required,
        )
        return plan

    def build_count(self, request: SearchRequest, catalogue: Catalogue, root_type: type) -> QueryPlan:
        """Count plan: filters only, with a traversal cache of its own."""
        cache = TraversalCache()
        conditions, distinct = self._conditions(request.filters, catalogue, cache)
        return QueryPlan(
            root_type=root_type,
            conditions=conditions,
            joins=cache.nodes,
            distinct_required=distinct,
            projection=Projection.COUNT,
        )

    def _conditions(
        self,
        filters: Iterable[Filter],
        catalogue: Catalogue,
        cache: TraversalCache,
    ) -> tuple[tuple[Condition, ...], bool]:
        conditions: list[Condition] = []
        distinct = False
        for filter_ in filters:
            field = catalogue[filter_.field]
            distinct = distinct or field.distinct or field.multi_valued
            conditions.append(self._condition(filter_, field, cache.resolve(field)))
        return tuple(conditions), distinct

    def _orderings(
        self,
        sorts: Iterable[Sort],
        catalogue: Catalogue,
        cache: TraversalCache,
    ) -> tuple[tuple[Ordering, ...], bool]:
        orderings: list[Ordering] = []
        distinct = False
        for sort in sorts:
            field = catalogue[sort.field]
            distinct = distinct or field.distinct or field.multi_valued
            orderings.append(Ordering(cache.resolve(field), sort.direction))
        return tuple(orderings), distinct

    def _condition(self, filter_: Filter, field: SearchField, target: FieldRef) -> Condition:
        operator = filter_.operator
        if operator in (FilterOperator.IS_NULL, FilterOperator.IS_NOT_NULL):
            return Condition(operator, target)

        typed = [self._registry.coerce(field, raw) for raw in filter_.values]

        match operator:
            case FilterOperator.EQUAL | FilterOperator.NOT_EQUAL:
                return Condition(operator, target, (typed[0].value,))
            case FilterOperator.IN | FilterOperator.NOT_IN:
                return Condition(operator, target, tuple(value.value for value in typed))
            case FilterOperator.LIKE | FilterOperator.NOT_LIKE:
                return Condition(operator, target, (self._like_pattern(typed[0]),))
            case _ if operator in _COMPARISONS:
                return Condition(operator, target, (self._comparable(field, typed[0]),))
            case _:
                raise InvariantViolationError(f"Unhandled filter operator {operator.value!r}")

    @staticmethod
    def _like_pattern(typed: TypedValue) -> str:
        return f"%{str(typed.value).lower()}%"

    @staticmethod
    def _comparable(field: SearchField, typed: TypedValue) -> Any:
        match typed.semantic_type:
            case (
                SemanticType.INT8
                | SemanticType.INT16
                | SemanticType.INT32
                | SemanticType.INT64
                | SemanticType.FLOAT
                | SemanticType.DOUBLE
                | SemanticType.DECIMAL
                | SemanticType.INSTANT
            ):
                return typed.value
            case _:
                raise InvariantViolationError(
                    f"Cannot build an ordered comparison for field '{field.id}' "
                    f"holding a {typed.semantic_type.value} value",
                    detail={"field": field.id, "semantic_type": typed.semantic_type.value},
                )
