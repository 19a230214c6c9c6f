"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    SearchEngineError
    ├── InvalidRequestError        (request.py)
    │   ├── InvalidPaginationError
    │   ├── PageSizeExceededError
    │   ├── UnknownFieldError
    │   ├── OperatorNotAllowedError
    │   ├── MissingFilterValueError
    │   └── UnsortableFieldError
    ├── ConversionError            (domain.py)
    ├── InvariantViolationError    (domain.py)
    └── QueryExecutionError        (infrastructure.py)

Configuration errors live in :mod:`mp_search.config.validation`.
"""

from mp_search.kernel.errors.base import SearchEngineError
from mp_search.kernel.errors.domain import ConversionError, InvariantViolationError
from mp_search.kernel.errors.infrastructure import QueryExecutionError
from mp_search.kernel.errors.request import (
    InvalidPaginationError,
    InvalidRequestError,
    MissingFilterValueError,
    OperatorNotAllowedError,
    PageSizeExceededError,
    UnknownFieldError,
    UnsortableFieldError,
)

__all__ = [
    "ConversionError",
    "InvalidPaginationError",
    "InvalidRequestError",
    "InvariantViolationError",
    "MissingFilterValueError",
    "OperatorNotAllowedError",
    "PageSizeExceededError",
    "QueryExecutionError",
    "SearchEngineError",
    "UnknownFieldError",
    "UnsortableFieldError",
]
