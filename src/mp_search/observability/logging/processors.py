"""Observability – get_logger helper and the search-context processor."""
from __future__ import annotations

from typing import Any

import structlog


class SearchContextProcessor:
    """structlog processor that renders root record types by name.

    Engine log calls bind ``record_type`` as the class object; this turns it
    into ``module.QualName`` so JSON renderers emit a stable string.
    """

    def __call__(
        self,
        logger: Any,           # noqa: ARG002
        method_name: str,      # noqa: ARG002
        event_dict: dict[str, Any],
    ) -> dict[str, Any]:
        record_type = event_dict.get("record_type")
        if isinstance(record_type, type):
            event_dict["record_type"] = f"{record_type.__module__}.{record_type.__qualname__}"
        return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["SearchContextProcessor", "get_logger"]
