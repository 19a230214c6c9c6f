"""Testing fakes – in-process doubles for search collaborators."""
from mp_search.testing.fakes.executor import RecordingQueryExecutor

__all__ = ["RecordingQueryExecutor"]
