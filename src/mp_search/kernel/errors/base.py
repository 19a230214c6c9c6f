"""Root error class for the mp-search error hierarchy."""

from __future__ import annotations

import json
from typing import Any


class SearchEngineError(Exception):
    """Root of the error hierarchy.

    ``client_error`` is true for kinds the caller can fix by changing the
    search request (invalid requests, unconvertible filter values); the rest
    point at setup problems, backend failures or bugs.

    Args:
        message: Human-readable description.
        code: Machine-readable slug (defaults to ``default_code``).
        detail: Field ids, operators and values involved (serialisable dict).
        cause: Original exception that triggered this error.
    """

    default_code: str = "search_engine_error"
    client_error: bool = False

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialise for logs or an HTTP error body; empty ``detail`` is omitted."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "client_error": self.client_error,
        }
        if self.detail:
            payload["detail"] = self.detail
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


__all__ = ["SearchEngineError"]
