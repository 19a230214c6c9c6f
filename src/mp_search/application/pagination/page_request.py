"""Application pagination – PageRequest."""
from __future__ import annotations

import dataclasses


@dataclasses.dataclass(frozen=True)
class PageRequest:
    """Offset-based pagination parameters (skip ``offset``, take ``size``)."""
    page: int = 1
    size: int = 20

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.size < 1:
            raise ValueError("size must be >= 1")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size

    @property
    def limit(self) -> int:
        return self.size


__all__ = ["PageRequest"]
