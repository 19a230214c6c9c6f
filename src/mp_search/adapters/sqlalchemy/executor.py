"""SQLAlchemy adapter – SqlAlchemyQueryExecutor."""
from __future__ import annotations

from typing import Any, Mapping

from mp_search.application.search.plan import Condition, FieldRef, Projection, QueryPlan
from mp_search.application.search.semantics import FilterOperator, SortDirection
from mp_search.kernel.errors import InvariantViolationError, QueryExecutionError

_ROOT = ""


def _require_sqlalchemy() -> None:
    try:
        import sqlalchemy  # noqa: F401
    except ImportError as exc:
        raise ImportError("Install 'mp-search[sqlalchemy]' to use the SQLAlchemy adapter") from exc


class SqlAlchemyQueryExecutor:
    """Runs query plans against an ``AsyncSession``.

    Each traversal node becomes one aliased LEFT OUTER JOIN along the mapped
    relationship; ``distinct_required`` becomes ``SELECT DISTINCT`` (wrapped
    in a count subquery for count plans). Root types are mapped classes, or
    are translated through *models*. Element collections are not supported.
    """

    def __init__(self, session: Any, models: Mapping[type, Any] | None = None) -> None:
        _require_sqlalchemy()
        self._session = session
        self._models = dict(models or {})

    async def fetch(self, plan: QueryPlan) -> list[Any]:
        result = await self._execute(self.compile(plan))
        return list(result.scalars().all())

    async def count(self, plan: QueryPlan) -> int:
        result = await self._execute(self.compile(plan))
        return int(result.scalar_one())

    def compile(self, plan: QueryPlan) -> Any:
        """Translate *plan* into an executable ``Select``."""
        from sqlalchemy import and_, func, inspect, select  # type: ignore[import-untyped]
        from sqlalchemy.exc import SQLAlchemyError  # type: ignore[import-untyped]
        from sqlalchemy.orm import RelationshipProperty, aliased  # type: ignore[import-untyped]

        model = self._models.get(plan.root_type, plan.root_type)
        try:
            if plan.projection is Projection.COUNT:
                stmt = select(*inspect(model).primary_key).select_from(model)
            else:
                stmt = select(model)

            entities: dict[str, Any] = {_ROOT: model}
            for node in plan.joins:
                relationship = getattr(entities[node.parent_path or _ROOT], node.attribute, None)
                if not isinstance(getattr(relationship, "property", None), RelationshipProperty):
                    raise QueryExecutionError(
                        f"'{node.path}' is not a mapped relationship; element collections "
                        "are not supported by the SQLAlchemy executor",
                        executor=type(self).__name__,
                    )
                target = aliased(relationship.property.mapper.class_)
                stmt = stmt.outerjoin(relationship.of_type(target))
                entities[node.path] = target

            if plan.conditions:
                stmt = stmt.where(and_(*(self._clause(c, entities) for c in plan.conditions)))
            if plan.distinct_required:
                stmt = stmt.distinct()

            if plan.projection is Projection.COUNT:
                return select(func.count()).select_from(stmt.subquery())

            for ordering in plan.orderings:
                column = self._column(ordering.target, entities)
                stmt = stmt.order_by(column.desc() if ordering.direction is SortDirection.DESC else column.asc())
            if plan.offset:
                stmt = stmt.offset(plan.offset)
            if plan.limit is not None:
                stmt = stmt.limit(plan.limit)
            return stmt
        except SQLAlchemyError as exc:
            raise QueryExecutionError(
                f"Cannot compile search for {plan.root_type.__qualname__}: {exc}",
                executor=type(self).__name__,
                cause=exc,
            ) from exc

    def _column(self, ref: FieldRef, entities: Mapping[str, Any]) -> Any:
        if ref.attribute is None:
            raise QueryExecutionError(
                f"Field '{ref.field_id}' is an element collection; not supported by the SQLAlchemy executor",
                executor=type(self).__name__,
            )
        entity = entities[ref.node.path if ref.node is not None else _ROOT]
        column = getattr(entity, ref.attribute, None)
        if column is None:
            raise QueryExecutionError(
                f"Field '{ref.field_id}' points at unmapped attribute '{ref.path}'",
                executor=type(self).__name__,
            )
        return column

    def _clause(self, condition: Condition, entities: Mapping[str, Any]) -> Any:  # noqa: PLR0911
        from sqlalchemy import func  # type: ignore[import-untyped]

        column = self._column(condition.target, entities)
        match condition.operator:
            case FilterOperator.EQUAL:
                return column == condition.value
            case FilterOperator.NOT_EQUAL:
                return column != condition.value
            case FilterOperator.IN:
                return column.in_(condition.values)
            case FilterOperator.NOT_IN:
                return column.not_in(condition.values)
            case FilterOperator.LIKE:
                return func.lower(column).like(condition.value)
            case FilterOperator.NOT_LIKE:
                return func.lower(column).not_like(condition.value)
            case FilterOperator.GREATER_THAN:
                return column > condition.value
            case FilterOperator.GREATER_THAN_OR_EQUAL:
                return column >= condition.value
            case FilterOperator.LESS_THAN:
                return column < condition.value
            case FilterOperator.LESS_THAN_OR_EQUAL:
                return column <= condition.value
            case FilterOperator.IS_NULL:
                return column.is_(None)
            case FilterOperator.IS_NOT_NULL:
                return column.is_not(None)
        raise InvariantViolationError(f"Unhandled filter operator {condition.operator.value!r}")

    async def _execute(self, stmt: Any) -> Any:
        from sqlalchemy.exc import SQLAlchemyError  # type: ignore[import-untyped]

        try:
            return await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            raise QueryExecutionError(
                f"Search query failed: {exc}",
                executor=type(self).__name__,
                cause=exc,
            ) from exc


__all__ = ["SqlAlchemyQueryExecutor"]
