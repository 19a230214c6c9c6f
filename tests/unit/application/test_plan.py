"""Unit tests for QueryPlanBuilder and TraversalCache."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

import pytest

from mp_search.application.search import (
    Catalogue,
    Filter,
    FilterOperator,
    Projection,
    QueryPlanBuilder,
    SearchField,
    SearchRequest,
    SemanticType,
    Sort,
    SortDirection,
    TraversalCache,
)
from mp_search.kernel.errors import ConversionError, InvariantViolationError


class Status(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Customer:
    pass


CATALOGUE = Catalogue(
    [
        SearchField("name", SemanticType.STRING),
        SearchField("age", SemanticType.INT32),
        SearchField("status", SemanticType.ENUM, enum_type=Status),
        SearchField("address.city", SemanticType.STRING),
        SearchField("tags", SemanticType.STRING, element_collection=True),
        SearchField("orders.status", SemanticType.STRING, multi_valued=True),
        SearchField("orders.total", SemanticType.DECIMAL, multi_valued=True),
        SearchField("orders.product.name", SemanticType.STRING, multi_valued=True),
    ]
)


@pytest.fixture()
def builder() -> QueryPlanBuilder:
    return QueryPlanBuilder()


# ---------------------------------------------------------------------------
# TraversalCache
# ---------------------------------------------------------------------------


class TestTraversalCache:
    def test_root_field_needs_no_node(self) -> None:
        cache = TraversalCache()
        ref = cache.resolve(CATALOGUE["name"])
        assert ref.node is None
        assert ref.attribute == "name"
        assert len(cache) == 0

    def test_shared_prefix_reuses_node(self) -> None:
        cache = TraversalCache()
        status = cache.resolve(CATALOGUE["orders.status"])
        total = cache.resolve(CATALOGUE["orders.total"])
        assert status.node is total.node
        assert len(cache) == 1
        assert "orders" in cache

    def test_nested_hops_chain_parents(self) -> None:
        cache = TraversalCache()
        ref = cache.resolve(CATALOGUE["orders.product.name"])
        assert [node.path for node in cache.nodes] == ["orders", "orders.product"]
        assert ref.node is not None
        assert ref.node.parent_path == "orders"
        assert ref.path == "orders.product.name"

    def test_element_collection_gets_own_node(self) -> None:
        cache = TraversalCache()
        ref = cache.resolve(CATALOGUE["tags"])
        assert ref.attribute is None
        assert ref.node is not None
        assert ref.node.path == "tags"
        assert ref.path == "tags"


# ---------------------------------------------------------------------------
# Row plans
# ---------------------------------------------------------------------------


class TestBuild:
    def test_age_and_order_total_scenario(self, builder: QueryPlanBuilder) -> None:
        request = SearchRequest(
            page=1,
            page_size=10,
            filters=[
                Filter("age", FilterOperator.GREATER_THAN, "18"),
                Filter("orders.total", FilterOperator.GREATER_THAN, "100.00"),
            ],
        )
        plan = builder.build(request, CATALOGUE, Customer)
        assert plan.root_type is Customer
        assert plan.projection is Projection.ROWS
        assert [c.value for c in plan.conditions] == [18, Decimal("100.00")]
        assert [node.path for node in plan.joins] == ["orders"]
        assert plan.distinct_required is True
        assert plan.offset == 0
        assert plan.limit == 10

    def test_one_join_for_two_filters_on_same_relationship(self, builder: QueryPlanBuilder) -> None:
        request = SearchRequest(
            filters=[
                Filter("orders.status", FilterOperator.EQUAL, "PAID"),
                Filter("orders.total", FilterOperator.GREATER_THAN_OR_EQUAL, "5"),
            ]
        )
        plan = builder.build(request, CATALOGUE, Customer)
        assert len(plan.joins) == 1
        assert plan.conditions[0].target.node is plan.conditions[1].target.node

    def test_scalar_only_is_not_distinct(self, builder: QueryPlanBuilder) -> None:
        request = SearchRequest(
            filters=[Filter("name", FilterOperator.EQUAL, "Alice"), Filter("address.city", "equal", "Oslo")]
        )
        plan = builder.build(request, CATALOGUE, Customer)
        assert plan.distinct_required is False
        assert [node.path for node in plan.joins] == ["address"]

    def test_element_collection_is_distinct(self, builder: QueryPlanBuilder) -> None:
        plan = builder.build(
            SearchRequest(filters=[Filter("tags", FilterOperator.EQUAL, "vip")]), CATALOGUE, Customer
        )
        assert plan.distinct_required is True
        assert plan.conditions[0].target.attribute is None

    def test_page_window(self, builder: QueryPlanBuilder) -> None:
        plan = builder.build(SearchRequest(page=3, page_size=25), CATALOGUE, Customer)
        assert plan.offset == 50
        assert plan.limit == 25

    def test_sorts_become_orderings(self, builder: QueryPlanBuilder) -> None:
        request = SearchRequest(sorts=[Sort("age", SortDirection.DESC), Sort("address.city")])
        plan = builder.build(request, CATALOGUE, Customer)
        assert [(o.target.field_id, o.direction) for o in plan.orderings] == [
            ("age", SortDirection.DESC),
            ("address.city", SortDirection.ASC),
        ]
        assert [node.path for node in plan.joins] == ["address"]

    def test_filter_and_sort_share_join(self, builder: QueryPlanBuilder) -> None:
        request = SearchRequest(
            filters=[Filter("address.city", FilterOperator.LIKE, "os")],
            sorts=[Sort("address.city")],
        )
        plan = builder.build(request, CATALOGUE, Customer)
        assert len(plan.joins) == 1


# ---------------------------------------------------------------------------
# Conditions
# ---------------------------------------------------------------------------


class TestConditions:
    def _condition(self, builder: QueryPlanBuilder, filter_: Filter):
        return builder.build(SearchRequest(filters=[filter_]), CATALOGUE, Customer).conditions[0]

    def test_enum_value(self, builder: QueryPlanBuilder) -> None:
        condition = self._condition(builder, Filter("status", FilterOperator.EQUAL, "active"))
        assert condition.values == (Status.ACTIVE,)

    def test_bad_enum_value(self, builder: QueryPlanBuilder) -> None:
        with pytest.raises(ConversionError):
            self._condition(builder, Filter("status", FilterOperator.EQUAL, "bogus"))

    def test_equal_takes_first_value(self, builder: QueryPlanBuilder) -> None:
        condition = self._condition(builder, Filter("age", FilterOperator.EQUAL, ["30", "40"]))
        assert condition.values == (30,)

    def test_every_value_is_coerced(self, builder: QueryPlanBuilder) -> None:
        with pytest.raises(ConversionError):
            self._condition(builder, Filter("age", FilterOperator.EQUAL, ["30", "old"]))

    def test_in_takes_all_values(self, builder: QueryPlanBuilder) -> None:
        condition = self._condition(builder, Filter("age", FilterOperator.IN, ["30", "40"]))
        assert condition.values == (30, 40)

    def test_like_builds_lowercase_contains_pattern(self, builder: QueryPlanBuilder) -> None:
        condition = self._condition(builder, Filter("name", FilterOperator.LIKE, "ALI"))
        assert condition.value == "%ali%"

    def test_null_check_drops_values(self, builder: QueryPlanBuilder) -> None:
        condition = self._condition(builder, Filter("name", FilterOperator.IS_NULL, "ignored"))
        assert condition.values == ()

    def test_comparison_on_unordered_type_is_invariant_violation(self, builder: QueryPlanBuilder) -> None:
        # Bypasses the validator on purpose
        with pytest.raises(InvariantViolationError):
            self._condition(builder, Filter("name", FilterOperator.GREATER_THAN, "a"))


# ---------------------------------------------------------------------------
# Count plans
# ---------------------------------------------------------------------------


class TestBuildCount:
    def test_count_plan_has_no_sorts_or_page(self, builder: QueryPlanBuilder) -> None:
        request = SearchRequest(
            page=2,
            page_size=5,
            sorts=[Sort("address.city")],
            filters=[Filter("age", FilterOperator.LESS_THAN, "65")],
        )
        plan = builder.build_count(request, CATALOGUE, Customer)
        assert plan.projection is Projection.COUNT
        assert plan.orderings == ()
        assert plan.joins == ()
        assert plan.page is None
        assert plan.limit is None

    def test_count_plan_uses_fresh_traversal(self, builder: QueryPlanBuilder) -> None:
        request = SearchRequest(filters=[Filter("orders.total", FilterOperator.GREATER_THAN, "1")])
        rows = builder.build(request, CATALOGUE, Customer)
        count = builder.build_count(request, CATALOGUE, Customer)
        assert rows.joins == count.joins
        assert rows.joins[0] is not count.joins[0]
        assert count.distinct_required is True

    def test_sort_on_to_one_not_distinct_for_count(self, builder: QueryPlanBuilder) -> None:
        plan = builder.build_count(SearchRequest(sorts=[Sort("address.city")]), CATALOGUE, Customer)
        assert plan.distinct_required is False
