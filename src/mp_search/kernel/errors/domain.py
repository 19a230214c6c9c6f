"""Value and invariant errors raised while translating a request."""

from __future__ import annotations

from typing import Any

from mp_search.kernel.errors.base import SearchEngineError


class ConversionError(SearchEngineError):
    """A raw filter value cannot be coerced to the field's semantic type."""

    default_code = "conversion_error"
    client_error = True

    def __init__(
        self,
        field: str,
        raw_value: str,
        semantic_type: str,
        reason: str | None = None,
        **kwargs: Any,
    ) -> None:
        msg = f"Unable to convert search field '{field}' with value {raw_value!r} to {semantic_type}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(
            msg,
            detail={"field": field, "raw_value": raw_value, "semantic_type": semantic_type},
            **kwargs,
        )
        self.field = field
        self.raw_value = raw_value
        self.semantic_type = semantic_type


class InvariantViolationError(SearchEngineError):
    """An internal invariant was broken; a bug, never a bad request."""

    default_code = "invariant_violation"


__all__ = ["ConversionError", "InvariantViolationError"]
