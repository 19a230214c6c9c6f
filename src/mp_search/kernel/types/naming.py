"""Naming conventions for generated search field ids."""

from __future__ import annotations

import re
from enum import Enum
from typing import Final

_WORD_BOUNDARY: Final = re.compile(r"([a-z0-9])([A-Z])")


class NamingConvention(str, Enum):
    """How attribute names become field ids and how nested ids are merged.

    ``IDENTITY`` keeps names untouched and merges camel-style
    (``orders`` + ``total`` -> ``ordersTotal``); the other two insert their
    separator at lower/upper boundaries and lowercase the result.
    """

    IDENTITY = "identity"
    SNAKE_CASE = "snake_case"
    DOT_CASE = "dot.case"

    @property
    def separator(self) -> str:
        match self:
            case NamingConvention.SNAKE_CASE:
                return "_"
            case NamingConvention.DOT_CASE:
                return "."
            case _:
                return ""

    def format_id(self, name: str) -> str:
        if self is NamingConvention.IDENTITY:
            return name
        return _WORD_BOUNDARY.sub(rf"\1{self.separator}\2", name).lower()

    def merge(self, parent_id: str, nested_id: str) -> str:
        if self is NamingConvention.IDENTITY:
            return parent_id + nested_id[:1].upper() + nested_id[1:]
        return f"{parent_id}{self.separator}{nested_id}"


__all__ = ["NamingConvention"]
