"""Kernel – 100% framework-agnostic building blocks."""

from mp_search.kernel.errors import (
    ConversionError,
    InvalidRequestError,
    InvariantViolationError,
    QueryExecutionError,
    SearchEngineError,
)
from mp_search.kernel.types import CurrencyCode, NamingConvention

__all__ = [
    "ConversionError",
    "CurrencyCode",
    "InvalidRequestError",
    "InvariantViolationError",
    "NamingConvention",
    "QueryExecutionError",
    "SearchEngineError",
]
