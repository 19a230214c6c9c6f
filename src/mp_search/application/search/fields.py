"""Application search – SearchField and Catalogue."""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, Iterable, Iterator, Mapping, Union

from mp_search.application.search.capabilities import DEFAULT_CAPABILITIES, CapabilityTable
from mp_search.application.search.semantics import FilterOperator, SemanticType
from mp_search.config.validation import ConfigurationError

__all__ = ["Catalogue", "CatalogueSource", "SearchField"]


@dataclasses.dataclass(frozen=True)
class SearchField:
    """An addressable attribute of a root record type.

    ``path`` defaults to ``id``. A multi-valued field is always ``distinct``;
    ``element_collection`` marks a field whose last path segment is itself a
    collection of values.
    """

    id: str
    semantic_type: SemanticType
    path: str | None = None
    multi_valued: bool = False
    distinct: bool = False
    element_collection: bool = False
    operators: frozenset[FilterOperator] | None = None
    enum_type: type[Enum] | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ConfigurationError("Search field id must not be empty")
        if self.path is None:
            object.__setattr__(self, "path", self.id)
        if not self.path:
            raise ConfigurationError(f"Search field '{self.id}' has an empty path")
        if self.element_collection and not self.multi_valued:
            object.__setattr__(self, "multi_valued", True)
        if self.multi_valued and not self.distinct:
            object.__setattr__(self, "distinct", True)
        if self.operators is not None and not isinstance(self.operators, frozenset):
            object.__setattr__(self, "operators", frozenset(FilterOperator(op) for op in self.operators))
        if self.semantic_type is SemanticType.ENUM and self.enum_type is None:
            raise ConfigurationError(f"Enum search field '{self.id}' needs an enum_type")
        if self.enum_type is not None and self.semantic_type is not SemanticType.ENUM:
            raise ConfigurationError(
                f"Search field '{self.id}' declares enum_type but has semantic type {self.semantic_type.value}"
            )

    @property
    def segments(self) -> list[str]:
        return self.path.split(".")  # type: ignore[union-attr]


CatalogueSource = Union["Catalogue", Mapping[str, SearchField], Iterable[SearchField]]


class Catalogue(Mapping[str, SearchField]):
    """Ordered, id-unique collection of search fields for one root type."""

    def __init__(
        self,
        fields: Iterable[SearchField],
        capabilities: CapabilityTable = DEFAULT_CAPABILITIES,
    ) -> None:
        by_id: dict[str, SearchField] = {}
        for field in fields:
            if field.id in by_id:
                raise ConfigurationError(
                    f"Duplicate search field id '{field.id}' "
                    f"(paths '{by_id[field.id].path}' and '{field.path}')"
                )
            if field.operators is not None:
                unsupported = field.operators - capabilities.operators_for(field.semantic_type)
                if unsupported:
                    names = ", ".join(sorted(op.value for op in unsupported))
                    raise ConfigurationError(
                        f"Search field '{field.id}' restricts to operators not supported "
                        f"by {field.semantic_type.value}: {names}"
                    )
            by_id[field.id] = field
        self._fields = by_id

    @classmethod
    def of(cls, source: CatalogueSource, capabilities: CapabilityTable = DEFAULT_CAPABILITIES) -> "Catalogue":
        """Normalise a catalogue, an id → field mapping or a field iterable."""
        if isinstance(source, Catalogue):
            return source
        if isinstance(source, Mapping):
            for key, field in source.items():
                if key != field.id:
                    raise ConfigurationError(f"Catalogue key '{key}' does not match field id '{field.id}'")
            return cls(source.values(), capabilities)
        return cls(source, capabilities)

    def __getitem__(self, field_id: str) -> SearchField:
        return self._fields[field_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Catalogue):
            return self.fields == other.fields
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.fields)

    def __repr__(self) -> str:
        return f"Catalogue({list(self._fields)!r})"

    @property
    def fields(self) -> tuple[SearchField, ...]:
        return tuple(self._fields.values())
