"""Application search – type coercion registry.

Raw filter values arrive as strings. The registry turns them into a
:class:`TypedValue` tagged with the field's semantic type, so later stages
switch on the tag rather than probing the Python type of the value.
"""
from __future__ import annotations

import dataclasses
import datetime
import re
import uuid
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Callable, Mapping

from mp_search.application.search.fields import SearchField
from mp_search.application.search.semantics import SemanticType
from mp_search.kernel.errors import ConversionError, InvariantViolationError
from mp_search.kernel.types import CurrencyCode

__all__ = [
    "DEFAULT_REGISTRY",
    "EPOCH",
    "CoercionRegistry",
    "Converter",
    "TypedValue",
]

Converter = Callable[[str], Any]

EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)

_INTEGER = re.compile(r"[+-]?[0-9]+")

_INT_BITS: Mapping[SemanticType, int] = {
    SemanticType.INT8: 8,
    SemanticType.INT16: 16,
    SemanticType.INT32: 32,
    SemanticType.INT64: 64,
}


@dataclasses.dataclass(frozen=True, slots=True)
class TypedValue:
    semantic_type: SemanticType
    value: Any

    @property
    def is_ordered(self) -> bool:
        return self.semantic_type.is_ordered


def _parse_int(raw: str) -> int:
    text = raw.strip()
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"{raw!r} is not a base-10 integer")
    return int(text)


def _bounded_int(bits: int) -> Converter:
    low, high = -(2 ** (bits - 1)), 2 ** (bits - 1) - 1

    def convert(raw: str) -> int:
        value = _parse_int(raw)
        if not low <= value <= high:
            raise ValueError(f"{value} is out of range for a {bits}-bit integer")
        return value

    return convert


def _to_bool(raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ValueError("expected 'true' or 'false'")


def _to_decimal(raw: str) -> Decimal:
    value = Decimal(raw.strip())
    if not value.is_finite():
        raise ValueError(f"{raw!r} is not a finite decimal")
    return value


def _to_instant(raw: str) -> datetime.datetime:
    return EPOCH + datetime.timedelta(milliseconds=_parse_int(raw))


_DEFAULT_CONVERTERS: dict[SemanticType, Converter] = {
    SemanticType.STRING: lambda raw: raw,
    SemanticType.BOOLEAN: _to_bool,
    **{semantic: _bounded_int(bits) for semantic, bits in _INT_BITS.items()},
    SemanticType.FLOAT: float,
    SemanticType.DOUBLE: float,
    SemanticType.DECIMAL: _to_decimal,
    SemanticType.INSTANT: _to_instant,
    SemanticType.UUID: uuid.UUID,
    SemanticType.CURRENCY: CurrencyCode,
}

_DEFAULT_PYTHON_TYPES: dict[type, SemanticType] = {
    str: SemanticType.STRING,
    bool: SemanticType.BOOLEAN,
    int: SemanticType.INT64,
    float: SemanticType.DOUBLE,
    Decimal: SemanticType.DECIMAL,
    datetime.datetime: SemanticType.INSTANT,
    uuid.UUID: SemanticType.UUID,
    CurrencyCode: SemanticType.CURRENCY,
}


class CoercionRegistry:
    """Immutable semantic type → converter table.

    Also answers which Python attribute types map onto which semantic type,
    which is how field discovery classifies plain attributes. Enumerations are
    handled by member-name lookup and need no registration.
    """

    def __init__(
        self,
        converters: Mapping[SemanticType, Converter],
        python_types: Mapping[type, SemanticType] | None = None,
    ) -> None:
        self._converters = MappingProxyType(dict(converters))
        self._python_types = MappingProxyType(dict(python_types or {}))

    def supports(self, semantic_type: SemanticType) -> bool:
        return semantic_type is SemanticType.ENUM or semantic_type in self._converters

    def semantic_type_for(self, python_type: Any) -> SemanticType | None:
        semantic = self._python_types.get(python_type)
        if semantic is not None and self.supports(semantic):
            return semantic
        return None

    def with_converter(
        self,
        semantic_type: SemanticType,
        converter: Converter,
        *python_types: type,
    ) -> "CoercionRegistry":
        """Return a new registry with *converter* registered for *semantic_type*."""
        return CoercionRegistry(
            {**self._converters, semantic_type: converter},
            {**self._python_types, **{t: semantic_type for t in python_types}},
        )

    def coerce(self, field: SearchField, raw: str) -> TypedValue:
        """Convert *raw* to the semantic type of *field*.

        Raises:
            ConversionError: *raw* is not a valid value for the field.
        """
        semantic_type = field.semantic_type
        if semantic_type is SemanticType.ENUM:
            return TypedValue(semantic_type, self._to_enum(field, raw))

        converter = self._converters.get(semantic_type)
        if converter is None:
            raise ConversionError(field.id, raw, semantic_type.value, "no converter registered")
        try:
            value = converter(raw)
        except (ValueError, TypeError, ArithmeticError) as exc:
            raise ConversionError(field.id, raw, semantic_type.value, str(exc) or None, cause=exc) from exc
        return TypedValue(semantic_type, value)

    @staticmethod
    def _to_enum(field: SearchField, raw: str) -> Any:
        enum_type = field.enum_type
        if enum_type is None:
            raise InvariantViolationError(f"Enum search field '{field.id}' has no enum_type")
        try:
            return enum_type[raw.strip().upper()]
        except KeyError as exc:
            members = ", ".join(member.name for member in enum_type)
            raise ConversionError(
                field.id,
                raw,
                enum_type.__name__,
                f"expected one of {members}",
                cause=exc,
            ) from exc


DEFAULT_REGISTRY = CoercionRegistry(_DEFAULT_CONVERTERS, _DEFAULT_PYTHON_TYPES)
