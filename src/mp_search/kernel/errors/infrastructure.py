"""Infrastructure errors – failures inside a query executor backend."""

from __future__ import annotations

from typing import Any

from mp_search.kernel.errors.base import SearchEngineError


class QueryExecutionError(SearchEngineError):
    """The executor could not run a query plan against its backend."""

    default_code = "query_execution_error"

    def __init__(
        self,
        message: str,
        *,
        executor: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.executor = executor


__all__ = ["QueryExecutionError"]
