"""Config settings – SearchEngineSettings."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from mp_search.config.settings.base import Settings
from mp_search.config.validation import InvalidSettingValueError
from mp_search.kernel.types import NamingConvention

DEFAULT_MAX_PAGE_SIZE = 100


@dataclasses.dataclass
class SearchEngineSettings(Settings):
    """Tunables consumed by the search engine.

    Read from ``SEARCH_ENGINE_MAX_PAGE_SIZE`` and
    ``SEARCH_ENGINE_NAMING_CONVENTION`` by :class:`EnvSettingsLoader`.
    """

    _prefix: ClassVar[str] = "SEARCH_ENGINE"

    max_page_size: int = DEFAULT_MAX_PAGE_SIZE
    naming_convention: NamingConvention = NamingConvention.IDENTITY

    def _validate(self) -> None:
        if self.max_page_size < 1:
            raise InvalidSettingValueError("max_page_size", self.max_page_size, "must be >= 1")
        if not isinstance(self.naming_convention, NamingConvention):
            try:
                self.naming_convention = NamingConvention(self.naming_convention)
            except ValueError as exc:
                allowed = ", ".join(c.value for c in NamingConvention)
                raise InvalidSettingValueError(
                    "naming_convention", self.naming_convention, f"expected one of {allowed}"
                ) from exc


__all__ = ["DEFAULT_MAX_PAGE_SIZE", "SearchEngineSettings"]
