"""Unit tests for the search test fakes."""

from __future__ import annotations

from mp_search.application.search import (
    Catalogue,
    Filter,
    FilterOperator,
    InMemoryQueryExecutor,
    Projection,
    QueryExecutor,
    QueryPlanBuilder,
    SearchField,
    SearchRequest,
    SemanticType,
)
from mp_search.testing.fakes import RecordingQueryExecutor

CATALOGUE = Catalogue([SearchField("name", SemanticType.STRING)])


def _plans() -> tuple:
    request = SearchRequest(filters=[Filter("name", FilterOperator.EQUAL, "a")])
    builder = QueryPlanBuilder()
    return builder.build(request, CATALOGUE, dict), builder.build_count(request, CATALOGUE, dict)


class TestRecordingQueryExecutor:
    def test_is_query_executor(self) -> None:
        assert isinstance(RecordingQueryExecutor(), QueryExecutor)

    def test_canned_rows_and_total(self) -> None:
        row_plan, count_plan = _plans()
        fake = RecordingQueryExecutor(rows=[1, 2])
        assert fake.fetch(row_plan) == [1, 2]
        assert fake.count(count_plan) == 2

    def test_explicit_total(self) -> None:
        _, count_plan = _plans()
        assert RecordingQueryExecutor(total=11).count(count_plan) == 11

    def test_records_plans_by_projection(self) -> None:
        row_plan, count_plan = _plans()
        fake = RecordingQueryExecutor()
        fake.fetch(row_plan)
        fake.count(count_plan)
        assert fake.row_plans == [row_plan]
        assert fake.count_plans == [count_plan]
        assert [p.projection for p in fake.plans] == [Projection.ROWS, Projection.COUNT]

    def test_delegates(self) -> None:
        row_plan, count_plan = _plans()
        delegate = InMemoryQueryExecutor({dict: [{"name": "a"}, {"name": "b"}]})
        fake = RecordingQueryExecutor(delegate)
        assert fake.fetch(row_plan) == [{"name": "a"}]
        assert fake.count(count_plan) == 1

    def test_reset(self) -> None:
        row_plan, _ = _plans()
        fake = RecordingQueryExecutor()
        fake.fetch(row_plan)
        fake.reset()
        assert fake.plans == []
