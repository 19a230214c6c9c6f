"""SQLAlchemy adapter – query plan execution on an async session."""
from mp_search.adapters.sqlalchemy.executor import SqlAlchemyQueryExecutor

__all__ = ["SqlAlchemyQueryExecutor"]
