"""Request errors – a search request cannot be served as written."""

from __future__ import annotations

from typing import Any, Iterable

from mp_search.kernel.errors.base import SearchEngineError


class InvalidRequestError(SearchEngineError):
    """The search request violates a rule of the target catalogue or settings."""

    default_code = "invalid_request"
    client_error = True


class InvalidPaginationError(InvalidRequestError):
    """``page`` or ``page_size`` is below 1."""

    default_code = "invalid_pagination"

    def __init__(self, parameter: str, value: int, **kwargs: Any) -> None:
        super().__init__(
            f"'{parameter}' must be greater than or equal to 1, got {value}",
            detail={"parameter": parameter, "value": value},
            **kwargs,
        )
        self.parameter = parameter
        self.value = value


class PageSizeExceededError(InvalidRequestError):
    """Requested page size is above the configured maximum."""

    default_code = "page_size_exceeded"

    def __init__(self, page_size: int, max_page_size: int, **kwargs: Any) -> None:
        super().__init__(
            f"The search request is limited to {max_page_size} results, got {page_size}",
            detail={"page_size": page_size, "max_page_size": max_page_size},
            **kwargs,
        )
        self.page_size = page_size
        self.max_page_size = max_page_size


class UnknownFieldError(InvalidRequestError):
    """A filter or sort references a field id absent from the catalogue."""

    default_code = "unknown_field"

    def __init__(self, field: str, known_fields: Iterable[str], **kwargs: Any) -> None:
        known = sorted(known_fields)
        super().__init__(
            f"Search field '{field}' was not found. Known fields: {', '.join(known)}",
            detail={"field": field, "known_fields": known},
            **kwargs,
        )
        self.field = field
        self.known_fields = known


class OperatorNotAllowedError(InvalidRequestError):
    """The filter operator cannot be applied to the field."""

    default_code = "operator_not_allowed"

    def __init__(self, field: str, operator: str, allowed: Iterable[str], **kwargs: Any) -> None:
        allowed_list = sorted(allowed)
        super().__init__(
            f"Not allowed filter operator '{operator}' for field '{field}'. "
            f"Available operators: {', '.join(allowed_list)}",
            detail={"field": field, "operator": operator, "allowed": allowed_list},
            **kwargs,
        )
        self.field = field
        self.operator = operator
        self.allowed = allowed_list


class MissingFilterValueError(InvalidRequestError):
    """The filter operator requires at least one value but none was given."""

    default_code = "missing_filter_value"

    def __init__(self, field: str, operator: str, **kwargs: Any) -> None:
        super().__init__(
            f"Filter operator '{operator}' requires a value. Invalid field: '{field}'",
            detail={"field": field, "operator": operator},
            **kwargs,
        )
        self.field = field
        self.operator = operator


class UnsortableFieldError(InvalidRequestError):
    """Sorting across a fan-out join is ambiguous and rejected."""

    default_code = "unsortable_field"

    def __init__(self, field: str, **kwargs: Any) -> None:
        super().__init__(
            f"Sorting by fields in joined collections is not allowed. Invalid field: '{field}'",
            detail={"field": field},
            **kwargs,
        )
        self.field = field


__all__ = [
    "InvalidPaginationError",
    "InvalidRequestError",
    "MissingFilterValueError",
    "OperatorNotAllowedError",
    "PageSizeExceededError",
    "UnknownFieldError",
    "UnsortableFieldError",
]
