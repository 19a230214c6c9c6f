"""Application search – filter capability table.

Maps every :class:`FilterOperator` to the semantic types it may be applied to
and whether it needs a value. The table is immutable; build a custom one with
:meth:`CapabilityTable.with_operator` and pass it explicitly.
"""
from __future__ import annotations

import dataclasses
from types import MappingProxyType
from typing import Iterator, Mapping

from mp_search.application.search.semantics import ORDERED_TYPES, FilterOperator, SemanticType

__all__ = [
    "COMMON_TYPES",
    "DEFAULT_CAPABILITIES",
    "CapabilityTable",
    "OperatorCapability",
]

COMMON_TYPES: frozenset[SemanticType] = frozenset(
    {
        SemanticType.STRING,
        SemanticType.BOOLEAN,
        SemanticType.UUID,
        SemanticType.CURRENCY,
        SemanticType.ENUM,
    }
) | ORDERED_TYPES


@dataclasses.dataclass(frozen=True)
class OperatorCapability:
    supported_types: frozenset[SemanticType]
    requires_value: bool = True


class CapabilityTable(Mapping[FilterOperator, OperatorCapability]):
    """Read-only operator → capability mapping covering every operator."""

    def __init__(self, entries: Mapping[FilterOperator, OperatorCapability]) -> None:
        missing = set(FilterOperator) - set(entries)
        if missing:
            names = ", ".join(sorted(op.value for op in missing))
            raise ValueError(f"Capability table is missing operators: {names}")
        self._entries = MappingProxyType(dict(entries))
        by_type: dict[SemanticType, set[FilterOperator]] = {t: set() for t in SemanticType}
        for operator, capability in self._entries.items():
            for semantic_type in capability.supported_types:
                by_type[semantic_type].add(operator)
        self._by_type = MappingProxyType({t: frozenset(ops) for t, ops in by_type.items()})

    def __getitem__(self, operator: FilterOperator) -> OperatorCapability:
        return self._entries[operator]

    def __iter__(self) -> Iterator[FilterOperator]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def supports(self, operator: FilterOperator, semantic_type: SemanticType) -> bool:
        return semantic_type in self._entries[operator].supported_types

    def requires_value(self, operator: FilterOperator) -> bool:
        return self._entries[operator].requires_value

    def operators_for(self, semantic_type: SemanticType) -> frozenset[FilterOperator]:
        """Every operator applicable to *semantic_type*."""
        return self._by_type[semantic_type]

    def with_operator(self, operator: FilterOperator, capability: OperatorCapability) -> "CapabilityTable":
        """Return a new table with *operator* remapped to *capability*."""
        return CapabilityTable({**self._entries, operator: capability})


DEFAULT_CAPABILITIES = CapabilityTable(
    {
        FilterOperator.IS_NULL: OperatorCapability(COMMON_TYPES, requires_value=False),
        FilterOperator.IS_NOT_NULL: OperatorCapability(COMMON_TYPES, requires_value=False),
        FilterOperator.EQUAL: OperatorCapability(COMMON_TYPES),
        FilterOperator.NOT_EQUAL: OperatorCapability(COMMON_TYPES),
        FilterOperator.IN: OperatorCapability(COMMON_TYPES),
        FilterOperator.NOT_IN: OperatorCapability(COMMON_TYPES),
        FilterOperator.LIKE: OperatorCapability(frozenset({SemanticType.STRING})),
        FilterOperator.NOT_LIKE: OperatorCapability(frozenset({SemanticType.STRING})),
        FilterOperator.GREATER_THAN: OperatorCapability(ORDERED_TYPES),
        FilterOperator.GREATER_THAN_OR_EQUAL: OperatorCapability(ORDERED_TYPES),
        FilterOperator.LESS_THAN: OperatorCapability(ORDERED_TYPES),
        FilterOperator.LESS_THAN_OR_EQUAL: OperatorCapability(ORDERED_TYPES),
    }
)
