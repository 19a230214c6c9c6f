"""Application search – SearchService and AsyncSearchService.

Every public operation funnels through the same steps: resolve the catalogue
(discovered, or supplied by the caller), validate the request, build the row
and count plans, then hand them to the executor. Both plans are built before
anything executes, so a bad request never reaches the backend.
"""
from __future__ import annotations

import asyncio
import contextlib
import time
from typing import Any, Callable, Generic, Iterator, TypeVar

from mp_search.application.search.discovery import FieldDiscoverer, MetadataSource
from mp_search.application.search.executor import AsyncQueryExecutor, QueryExecutor
from mp_search.application.search.fields import Catalogue, CatalogueSource
from mp_search.application.search.plan import QueryPlanBuilder
from mp_search.application.search.query import SearchRequest
from mp_search.application.search.result import SearchResponse
from mp_search.application.search.validator import RequestValidator
from mp_search.config.settings import SearchEngineSettings
from mp_search.kernel.errors import SearchEngineError
from mp_search.observability.logging import get_logger

__all__ = ["AsyncSearchService", "SearchService"]

_log = get_logger(__name__)

TExecutor = TypeVar("TExecutor")


@contextlib.contextmanager
def _logged_rejection(record_type: type) -> Iterator[None]:
    try:
        yield
    except SearchEngineError as exc:
        _log.warning(
            "search.rejected",
            record_type=record_type,
            code=exc.code,
            client_error=exc.client_error,
            reason=exc.message,
        )
        raise


class _SearchServiceBase(Generic[TExecutor]):
    def __init__(
        self,
        executor: TExecutor,
        *,
        settings: SearchEngineSettings | None = None,
        source: MetadataSource | None = None,
        discoverer: FieldDiscoverer | None = None,
        validator: RequestValidator | None = None,
        builder: QueryPlanBuilder | None = None,
    ) -> None:
        self._settings = settings or SearchEngineSettings()
        self._executor = executor
        self._discoverer = discoverer or FieldDiscoverer(
            source, naming_convention=self._settings.naming_convention
        )
        self._validator = validator or RequestValidator(self._settings.max_page_size)
        self._builder = builder or QueryPlanBuilder()

    @property
    def settings(self) -> SearchEngineSettings:
        return self._settings

    def discover_fields(self, record_type: type) -> Catalogue:
        return self._discoverer.discover(record_type)

    def _catalogue(self, record_type: type, catalogue: CatalogueSource | None) -> Catalogue:
        if catalogue is None:
            return self.discover_fields(record_type)
        return Catalogue.of(catalogue)

    def _log_completed(self, record_type: type, response: SearchResponse[Any], started: float) -> None:
        _log.debug(
            "search.completed",
            record_type=record_type,
            returned=response.returned_count,
            total=response.total_count,
            duration_ms=round((time.monotonic() - started) * 1000, 2),
        )


class SearchService(_SearchServiceBase[QueryExecutor]):
    """Synchronous search over a :class:`QueryExecutor`."""

    def search(
        self,
        request: SearchRequest,
        record_type: type,
        catalogue: CatalogueSource | None = None,
        *,
        transform: Callable[[Any], Any] | None = None,
        with_totals: bool = True,
    ) -> SearchResponse[Any]:
        started = time.monotonic()
        fields = self._catalogue(record_type, catalogue)
        with _logged_rejection(record_type):
            self._validator.validate(request, fields)
            row_plan = self._builder.build(request, fields, record_type)
            count_plan = self._builder.build_count(request, fields, record_type) if with_totals else None
        rows = self._executor.fetch(row_plan)
        total = self._executor.count(count_plan) if count_plan is not None else None
        response: SearchResponse[Any] = SearchResponse.assemble(request, rows, total, transform)
        self._log_completed(record_type, response, started)
        return response

    def fetch(
        self,
        request: SearchRequest,
        record_type: type,
        catalogue: CatalogueSource | None = None,
    ) -> list[Any]:
        fields = self._catalogue(record_type, catalogue)
        with _logged_rejection(record_type):
            self._validator.validate(request, fields)
            row_plan = self._builder.build(request, fields, record_type)
        return self._executor.fetch(row_plan)

    def count(
        self,
        request: SearchRequest,
        record_type: type,
        catalogue: CatalogueSource | None = None,
    ) -> int:
        fields = self._catalogue(record_type, catalogue)
        with _logged_rejection(record_type):
            self._validator.validate(request, fields)
            count_plan = self._builder.build_count(request, fields, record_type)
        return self._executor.count(count_plan)


class AsyncSearchService(_SearchServiceBase[AsyncQueryExecutor]):
    """Search over an :class:`AsyncQueryExecutor`.

    With ``concurrent=True`` the row fetch and the count run together through
    :func:`asyncio.gather`; leave it off when the executor shares a single
    connection or session between the two.
    """

    def __init__(self, executor: AsyncQueryExecutor, *, concurrent: bool = False, **kwargs: Any) -> None:
        super().__init__(executor, **kwargs)
        self._concurrent = concurrent

    async def search(
        self,
        request: SearchRequest,
        record_type: type,
        catalogue: CatalogueSource | None = None,
        *,
        transform: Callable[[Any], Any] | None = None,
        with_totals: bool = True,
    ) -> SearchResponse[Any]:
        started = time.monotonic()
        fields = self._catalogue(record_type, catalogue)
        with _logged_rejection(record_type):
            self._validator.validate(request, fields)
            row_plan = self._builder.build(request, fields, record_type)
            count_plan = self._builder.build_count(request, fields, record_type) if with_totals else None
        total: int | None = None
        if count_plan is None:
            rows = await self._executor.fetch(row_plan)
        elif self._concurrent:
            rows, total = await asyncio.gather(
                self._executor.fetch(row_plan), self._executor.count(count_plan)
            )
        else:
            rows = await self._executor.fetch(row_plan)
            total = await self._executor.count(count_plan)
        response: SearchResponse[Any] = SearchResponse.assemble(request, rows, total, transform)
        self._log_completed(record_type, response, started)
        return response

    async def fetch(
        self,
        request: SearchRequest,
        record_type: type,
        catalogue: CatalogueSource | None = None,
    ) -> list[Any]:
        fields = self._catalogue(record_type, catalogue)
        with _logged_rejection(record_type):
            self._validator.validate(request, fields)
            row_plan = self._builder.build(request, fields, record_type)
        return await self._executor.fetch(row_plan)

    async def count(
        self,
        request: SearchRequest,
        record_type: type,
        catalogue: CatalogueSource | None = None,
    ) -> int:
        fields = self._catalogue(record_type, catalogue)
        with _logged_rejection(record_type):
            self._validator.validate(request, fields)
            count_plan = self._builder.build_count(request, fields, record_type)
        return await self._executor.count(count_plan)
