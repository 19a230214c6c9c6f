"""Application search – field metadata discovery.

Record types declare their searchable attributes explicitly as a sequence of
:class:`Attribute` descriptors. :class:`FieldDiscoverer` walks those
declarations, following relationships into related record types, and
flattens them into a :class:`Catalogue` of :class:`SearchField` entries.

Example::

    class Order:
        __searchable__ = (
            Attribute("status", OrderStatus),
            Attribute("total", Decimal),
        )

    class Customer:
        __searchable__ = (
            Attribute("name", str),
            Attribute.to_many("orders", Order),
        )

    FieldDiscoverer(naming_convention=NamingConvention.DOT_CASE).discover(Customer)
    # name, orders.status, orders.total (the last two distinct)
"""
from __future__ import annotations

import dataclasses
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Protocol, Sequence, runtime_checkable

from mp_search.application.search.capabilities import DEFAULT_CAPABILITIES, CapabilityTable
from mp_search.application.search.coercion import DEFAULT_REGISTRY, CoercionRegistry
from mp_search.application.search.fields import Catalogue, SearchField
from mp_search.application.search.semantics import FilterOperator, SemanticType
from mp_search.config.validation import ConfigurationError
from mp_search.kernel.types import NamingConvention
from mp_search.observability.logging import get_logger

__all__ = [
    "Attribute",
    "Cardinality",
    "DeclaredMetadataSource",
    "FieldDiscoverer",
    "MetadataSource",
    "RegistryMetadataSource",
]

_log = get_logger(__name__)


class Cardinality(str, Enum):
    SCALAR = "scalar"
    ELEMENT_COLLECTION = "element_collection"
    TO_ONE = "to_one"
    TO_MANY = "to_many"

    @property
    def is_relationship(self) -> bool:
        return self in (Cardinality.TO_ONE, Cardinality.TO_MANY)


@dataclasses.dataclass(frozen=True)
class Attribute:
    """Declaration of one attribute of a record type.

    ``type`` is a :class:`SemanticType`, a Python type known to the coercion
    registry, an :class:`~enum.Enum` subclass, or (for relationships) the
    related record type.
    """

    name: str
    type: Any
    cardinality: Cardinality = Cardinality.SCALAR
    id: str | None = None
    operators: frozenset[FilterOperator] | None = None
    searchable: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "cardinality", Cardinality(self.cardinality))
        if self.operators is not None and not isinstance(self.operators, frozenset):
            object.__setattr__(self, "operators", frozenset(FilterOperator(op) for op in self.operators))

    @classmethod
    def to_one(cls, name: str, target: type, *, id: str | None = None) -> "Attribute":  # noqa: A002
        return cls(name, target, Cardinality.TO_ONE, id=id)

    @classmethod
    def to_many(cls, name: str, target: type, *, id: str | None = None) -> "Attribute":  # noqa: A002
        return cls(name, target, Cardinality.TO_MANY, id=id)

    @classmethod
    def element_collection(
        cls,
        name: str,
        element_type: Any,
        *,
        id: str | None = None,  # noqa: A002
        operators: Iterable[FilterOperator] | None = None,
    ) -> "Attribute":
        return cls(
            name,
            element_type,
            Cardinality.ELEMENT_COLLECTION,
            id=id,
            operators=frozenset(operators) if operators is not None else None,
        )


@runtime_checkable
class MetadataSource(Protocol):
    """Port: the ordered attribute declarations of a record type."""

    def attributes(self, record_type: type) -> Sequence[Attribute]: ...


class DeclaredMetadataSource:
    """Reads ``__searchable__`` declared on the record type and its bases.

    Base class declarations come first, in method-resolution order from the
    most generic class down.
    """

    attribute_name = "__searchable__"

    def attributes(self, record_type: type) -> Sequence[Attribute]:
        declared = [
            klass.__dict__[self.attribute_name]
            for klass in reversed(record_type.__mro__)
            if self.attribute_name in klass.__dict__
        ]
        if not declared:
            raise ConfigurationError(
                f"{record_type.__qualname__} declares no '{self.attribute_name}' attributes"
            )
        return [attribute for group in declared for attribute in group]


class RegistryMetadataSource:
    """Attribute declarations registered from the outside, per record type."""

    def __init__(self, registrations: Mapping[type, Sequence[Attribute]] | None = None) -> None:
        self._registrations: dict[type, tuple[Attribute, ...]] = {}
        for record_type, attributes in (registrations or {}).items():
            self.register(record_type, attributes)

    def register(self, record_type: type, attributes: Iterable[Attribute]) -> None:
        self._registrations[record_type] = tuple(attributes)

    def attributes(self, record_type: type) -> Sequence[Attribute]:
        try:
            return self._registrations[record_type]
        except KeyError:
            raise ConfigurationError(
                f"No searchable attributes registered for {record_type.__qualname__}"
            ) from None


class FieldDiscoverer:
    """Builds and memoizes the search field catalogue of record types.

    The cache is filled with ``dict.setdefault`` so concurrent first-time
    discovery of one type converges on a single catalogue.
    """

    def __init__(
        self,
        source: MetadataSource | None = None,
        *,
        naming_convention: NamingConvention = NamingConvention.IDENTITY,
        registry: CoercionRegistry = DEFAULT_REGISTRY,
        capabilities: CapabilityTable = DEFAULT_CAPABILITIES,
    ) -> None:
        self._source: MetadataSource = source or DeclaredMetadataSource()
        self._naming = NamingConvention(naming_convention)
        self._registry = registry
        self._capabilities = capabilities
        self._cache: dict[type, Catalogue] = {}

    @property
    def naming_convention(self) -> NamingConvention:
        return self._naming

    def discover(self, record_type: type) -> Catalogue:
        cached = self._cache.get(record_type)
        if cached is not None:
            _log.debug("search.catalogue_cache_hit", record_type=record_type)
            return cached

        catalogue = Catalogue(self._collect(record_type, (record_type,)), self._capabilities)
        stored = self._cache.setdefault(record_type, catalogue)
        if stored is catalogue:
            _log.info("search.catalogue_built", record_type=record_type, fields=len(catalogue))
        return stored

    def collected(self) -> Mapping[type, Catalogue]:
        """Snapshot of every catalogue built so far."""
        return MappingProxyType(dict(self._cache))

    def _collect(self, record_type: type, stack: tuple[type, ...]) -> list[SearchField]:
        fields: list[SearchField] = []
        for attribute in self._source.attributes(record_type):
            if not attribute.searchable:
                continue
            # Prevent infinite recursion on self / mutually referencing types
            if isinstance(attribute.type, type) and attribute.type in stack:
                continue

            field_id = attribute.id or self._naming.format_id(attribute.name)
            cardinality = attribute.cardinality

            if cardinality.is_relationship:
                fields.extend(self._nested(record_type, attribute, field_id, stack))
                continue

            semantic_type, enum_type = self._classify(record_type, attribute)
            fields.append(
                SearchField(
                    id=field_id,
                    semantic_type=semantic_type,
                    path=attribute.name,
                    element_collection=cardinality is Cardinality.ELEMENT_COLLECTION,
                    operators=attribute.operators,
                    enum_type=enum_type,
                )
            )
        return fields

    def _nested(
        self,
        owner: type,
        attribute: Attribute,
        field_id: str,
        stack: tuple[type, ...],
    ) -> list[SearchField]:
        target = attribute.type
        if not isinstance(target, type):
            raise ConfigurationError(
                f"Relationship '{owner.__qualname__}.{attribute.name}' must target a record type, got {target!r}"
            )
        if attribute.operators is not None:
            raise ConfigurationError(
                f"Relationship '{owner.__qualname__}.{attribute.name}' cannot restrict operators"
            )

        fan_out = attribute.cardinality is Cardinality.TO_MANY
        return [
            dataclasses.replace(
                nested,
                id=self._naming.merge(field_id, self._naming.format_id(nested.id)),
                path=f"{attribute.name}.{nested.path}",
                multi_valued=nested.multi_valued or fan_out,
                distinct=nested.distinct or fan_out,
            )
            for nested in self._collect(target, stack + (target,))
        ]

    def _classify(self, owner: type, attribute: Attribute) -> tuple[SemanticType, type[Enum] | None]:
        declared = attribute.type
        if isinstance(declared, SemanticType):
            if declared is SemanticType.ENUM or not self._registry.supports(declared):
                raise ConfigurationError(
                    f"Attribute '{owner.__qualname__}.{attribute.name}' cannot be declared as "
                    f"{declared.value}; declare the enum class or a registered type instead"
                )
            return declared, None
        if isinstance(declared, type) and issubclass(declared, Enum):
            return SemanticType.ENUM, declared

        semantic_type = self._registry.semantic_type_for(declared)
        if semantic_type is None:
            raise ConfigurationError(
                f"Attribute '{owner.__qualname__}.{attribute.name}' has unsupported type {declared!r}"
            )
        return semantic_type, None
