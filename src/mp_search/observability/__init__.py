"""Observability – structured logging for the search engine."""
from mp_search.observability.logging import JsonLoggerFactory, get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]
