"""Application search – semantic types, filter operators, sort direction."""
from __future__ import annotations

from enum import Enum

__all__ = ["ORDERED_TYPES", "FilterOperator", "SemanticType", "SortDirection"]


class SemanticType(str, Enum):
    """Value category of a search field, independent of the host language type."""

    STRING = "string"
    BOOLEAN = "boolean"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    FLOAT = "float"
    DOUBLE = "double"
    DECIMAL = "decimal"
    INSTANT = "instant"
    UUID = "uuid"
    CURRENCY = "currency"
    ENUM = "enum"

    @property
    def is_ordered(self) -> bool:
        return self in ORDERED_TYPES


ORDERED_TYPES: frozenset[SemanticType] = frozenset(
    {
        SemanticType.INT8,
        SemanticType.INT16,
        SemanticType.INT32,
        SemanticType.INT64,
        SemanticType.FLOAT,
        SemanticType.DOUBLE,
        SemanticType.DECIMAL,
        SemanticType.INSTANT,
    }
)


class FilterOperator(str, Enum):
    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    IN = "in"
    NOT_IN = "not_in"
    LIKE = "like"
    NOT_LIKE = "not_like"
    GREATER_THAN = "greater_than"
    GREATER_THAN_OR_EQUAL = "greater_than_or_equal"
    LESS_THAN = "less_than"
    LESS_THAN_OR_EQUAL = "less_than_or_equal"
    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"
