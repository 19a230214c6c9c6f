"""Application pagination – offset/limit primitive."""
from mp_search.application.pagination.page_request import PageRequest

__all__ = ["PageRequest"]
