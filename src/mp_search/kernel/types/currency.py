"""ISO-4217 currency code value type."""

from __future__ import annotations

import re
from typing import Final

_ISO4217: Final = re.compile(r"^[A-Z]{3}$")


class CurrencyCode(str):
    """Upper-case three-letter ISO 4217 currency code.

    A ``str`` subclass so it compares equal to plain codes stored on records
    and binds as text in SQL drivers.
    """

    __slots__ = ()

    def __new__(cls, value: str) -> "CurrencyCode":
        code = value.strip().upper()
        if not _ISO4217.match(code):
            raise ValueError(f"Invalid ISO 4217 currency code: {value!r}")
        return super().__new__(cls, code)

    def __repr__(self) -> str:
        return f"CurrencyCode({str(self)!r})"


__all__ = ["CurrencyCode"]
