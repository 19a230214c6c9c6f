"""Application search – RequestValidator."""
from __future__ import annotations

from mp_search.application.search.capabilities import DEFAULT_CAPABILITIES, CapabilityTable
from mp_search.application.search.fields import Catalogue, SearchField
from mp_search.application.search.query import Filter, SearchRequest, Sort
from mp_search.application.search.semantics import FilterOperator
from mp_search.config.settings import DEFAULT_MAX_PAGE_SIZE
from mp_search.kernel.errors import (
    InvalidPaginationError,
    MissingFilterValueError,
    OperatorNotAllowedError,
    PageSizeExceededError,
    UnknownFieldError,
    UnsortableFieldError,
)

__all__ = ["RequestValidator"]


class RequestValidator:
    """Check a :class:`SearchRequest` against a catalogue before planning.

    Every check raises a subclass of
    :class:`~mp_search.kernel.errors.InvalidRequestError`; a request that
    passes is safe to hand to the plan builder.
    """

    def __init__(
        self,
        max_page_size: int = DEFAULT_MAX_PAGE_SIZE,
        capabilities: CapabilityTable = DEFAULT_CAPABILITIES,
    ) -> None:
        self._max_page_size = max_page_size
        self._capabilities = capabilities

    @property
    def max_page_size(self) -> int:
        return self._max_page_size

    def validate(self, request: SearchRequest, catalogue: Catalogue) -> None:
        if request.page < 1:
            raise InvalidPaginationError("page", request.page)
        if request.page_size < 1:
            raise InvalidPaginationError("page_size", request.page_size)
        if request.page_size > self._max_page_size:
            raise PageSizeExceededError(request.page_size, self._max_page_size)

        for sort in request.sorts:
            self._validate_sort(sort, catalogue)
        for filter_ in request.filters:
            self._validate_filter(filter_, catalogue)

    def allowed_operators(self, field: SearchField) -> frozenset[FilterOperator]:
        """Operators valid for *field*: its restriction, else everything its type supports."""
        supported = self._capabilities.operators_for(field.semantic_type)
        if field.operators:
            return field.operators & supported
        return supported

    def _validate_sort(self, sort: Sort, catalogue: Catalogue) -> None:
        field = self._lookup(sort.field, catalogue)
        if field.distinct:
            raise UnsortableFieldError(sort.field)

    def _validate_filter(self, filter_: Filter, catalogue: Catalogue) -> None:
        field = self._lookup(filter_.field, catalogue)
        allowed = self.allowed_operators(field)
        if filter_.operator not in allowed:
            raise OperatorNotAllowedError(
                filter_.field,
                filter_.operator.value,
                (op.value for op in allowed),
            )
        if self._capabilities.requires_value(filter_.operator) and not filter_.values:
            raise MissingFilterValueError(filter_.field, filter_.operator.value)

    @staticmethod
    def _lookup(field_id: str, catalogue: Catalogue) -> SearchField:
        field = catalogue.get(field_id)
        if field is None:
            raise UnknownFieldError(field_id, catalogue.keys())
        return field
