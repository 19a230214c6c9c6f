"""
mp_search – declarative search over record types.

Import path convention::

    from mp_search.application.search import SearchService, SearchRequest, Filter
    from mp_search.kernel.errors import InvalidRequestError, ConversionError
    from mp_search.config import SearchEngineSettings, ConfigurationError
    from mp_search.adapters.sqlalchemy import SqlAlchemyQueryExecutor
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
