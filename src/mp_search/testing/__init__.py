"""Testing – helpers for code that depends on mp_search."""
from mp_search.testing.fakes import RecordingQueryExecutor

__all__ = ["RecordingQueryExecutor"]
