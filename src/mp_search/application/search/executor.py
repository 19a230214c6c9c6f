"""Application search – QueryExecutor ports and InMemoryQueryExecutor."""
from __future__ import annotations

import re
from typing import Any, Callable, Iterable, Mapping, Protocol, Sequence, runtime_checkable

from mp_search.application.search.plan import Condition, FieldRef, QueryPlan
from mp_search.application.search.semantics import FilterOperator, SortDirection
from mp_search.kernel.errors import InvariantViolationError, QueryExecutionError

__all__ = ["AsyncQueryExecutor", "InMemoryQueryExecutor", "QueryExecutor"]

_ROOT = ""
_COLLECTION_TYPES = (list, tuple, set, frozenset)

Row = dict[str, Any]


@runtime_checkable
class QueryExecutor(Protocol):
    def fetch(self, plan: QueryPlan) -> list[Any]: ...
    def count(self, plan: QueryPlan) -> int: ...


@runtime_checkable
class AsyncQueryExecutor(Protocol):
    async def fetch(self, plan: QueryPlan) -> list[Any]: ...
    async def count(self, plan: QueryPlan) -> int: ...


def _read(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _like_regex(pattern: str) -> re.Pattern[str]:
    translated = "".join(
        ".*" if ch == "%" else "." if ch == "_" else re.escape(ch)
        for ch in pattern
    )
    return re.compile(translated, re.DOTALL)


class InMemoryQueryExecutor:
    """Runs query plans over in-process records with SQL join semantics.

    Each traversal node is a LEFT JOIN: a collection fans the row out once per
    element, an empty collection or missing value yields a single ``None``
    binding. Conditions use SQL null logic: every comparison against ``None``
    is false except the null checks. Records may be objects or mappings.
    """

    def __init__(
        self,
        records: Mapping[type, Iterable[Any]] | None = None,
        *,
        reader: Callable[[Any, str], Any] = _read,
    ) -> None:
        self._records: dict[type, list[Any]] = {
            record_type: list(items) for record_type, items in (records or {}).items()
        }
        self._read = reader

    def add(self, record_type: type, items: Iterable[Any]) -> None:
        self._records.setdefault(record_type, []).extend(items)

    def fetch(self, plan: QueryPlan) -> list[Any]:
        rows = self._matching_rows(plan)
        try:
            for ordering in reversed(plan.orderings):
                rows.sort(
                    key=lambda row, ref=ordering.target: self._sort_key(row, ref),
                    reverse=ordering.direction is SortDirection.DESC,
                )
        except (TypeError, ArithmeticError) as exc:
            raise QueryExecutionError(
                f"Incomparable values while sorting {plan.root_type.__qualname__}: {exc}",
                executor=type(self).__name__,
                cause=exc,
            ) from exc
        roots = self._project(rows, plan.distinct_required)
        end = None if plan.limit is None else plan.offset + plan.limit
        return roots[plan.offset:end]

    def count(self, plan: QueryPlan) -> int:
        return len(self._project(self._matching_rows(plan), plan.distinct_required))

    def _matching_rows(self, plan: QueryPlan) -> list[Row]:
        try:
            roots = self._records[plan.root_type]
        except KeyError:
            raise QueryExecutionError(
                f"No records registered for {plan.root_type.__qualname__}",
                executor=type(self).__name__,
            ) from None

        rows: list[Row] = [{_ROOT: root} for root in roots]
        for node in plan.joins:
            parent_key = node.parent_path or _ROOT
            joined: list[Row] = []
            for row in rows:
                parent = row[parent_key]
                value = None if parent is None else self._read(parent, node.attribute)
                if isinstance(value, _COLLECTION_TYPES):
                    elements = list(value) or [None]
                    joined.extend({**row, node.path: element} for element in elements)
                else:
                    joined.append({**row, node.path: value})
            rows = joined

        try:
            return [row for row in rows if all(self._matches(row, c) for c in plan.conditions)]
        except (TypeError, ArithmeticError) as exc:
            raise QueryExecutionError(
                f"Incomparable values while filtering {plan.root_type.__qualname__}: {exc}",
                executor=type(self).__name__,
                cause=exc,
            ) from exc

    def _value(self, row: Row, ref: FieldRef) -> Any:
        holder = row[ref.node.path if ref.node is not None else _ROOT]
        if ref.attribute is None:
            return holder
        return None if holder is None else self._read(holder, ref.attribute)

    def _matches(self, row: Row, condition: Condition) -> bool:  # noqa: PLR0911
        value = self._value(row, condition.target)
        match condition.operator:
            case FilterOperator.IS_NULL:
                return value is None
            case FilterOperator.IS_NOT_NULL:
                return value is not None
        if value is None:
            return False
        match condition.operator:
            case FilterOperator.EQUAL:
                return value == condition.value
            case FilterOperator.NOT_EQUAL:
                return value != condition.value
            case FilterOperator.IN:
                return value in condition.values
            case FilterOperator.NOT_IN:
                return value not in condition.values
            case FilterOperator.LIKE:
                return _like_regex(condition.value).fullmatch(str(value).lower()) is not None
            case FilterOperator.NOT_LIKE:
                return _like_regex(condition.value).fullmatch(str(value).lower()) is None
            case FilterOperator.GREATER_THAN:
                return value > condition.value
            case FilterOperator.GREATER_THAN_OR_EQUAL:
                return value >= condition.value
            case FilterOperator.LESS_THAN:
                return value < condition.value
            case FilterOperator.LESS_THAN_OR_EQUAL:
                return value <= condition.value
        raise InvariantViolationError(f"Unhandled filter operator {condition.operator.value!r}")

    def _sort_key(self, row: Row, ref: FieldRef) -> tuple[bool, Any]:
        # NULLs sort last ascending, first descending
        value = self._value(row, ref)
        return (value is None, 0 if value is None else value)

    @staticmethod
    def _project(rows: Sequence[Row], distinct: bool) -> list[Any]:
        roots = [row[_ROOT] for row in rows]
        if not distinct:
            return roots
        seen: set[int] = set()
        unique: list[Any] = []
        for root in roots:
            if id(root) not in seen:
                seen.add(id(root))
                unique.append(root)
        return unique
