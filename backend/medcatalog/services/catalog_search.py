"""Catalog Search Service — the single search(raw_params) entry point.

Invariants:
    - raw_params are planned first; planning never fails
    - Non-empty free text → ResultAssembler; empty → plain query executor
    - A deadline bounds the whole call; on expiry SearchCancelledError is raised
      and no partial page is returned
    - CatalogUnavailableError propagates unchanged (retryable, no retry here)
    - Caller-side task cancellation propagates as asyncio.CancelledError

Design Decisions:
    - asyncio.wait_for around the whole call: the outstanding catalog read is
      cancelled with it, so nothing keeps running after the deadline
"""

import asyncio
import logging
from typing import Mapping

from medcatalog.core.domain_types import PagingPolicy
from medcatalog.core.errors import ErrorContext, SearchCancelledError
from medcatalog.core.query_planner import (
    DEFAULT_MAX_PAGE_SIZE, DEFAULT_PAGE_SIZE, SearchRequest, plan_search,
)
from medcatalog.core.records import ResultPage
from medcatalog.core.repository_protocols import CatalogReader
from medcatalog.services.plain_query import execute_plain_query
from medcatalog.services.result_assembler import ResultAssembler

logger = logging.getLogger(__name__)


class CatalogSearchService:
    """Plans a request and routes it to the search or plain path."""

    def __init__(
        self,
        catalog: CatalogReader,
        paging_policy: PagingPolicy = PagingPolicy.BEST_MATCHES,
        timeout_seconds: float | None = None,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = DEFAULT_MAX_PAGE_SIZE,
    ):
        self.catalog = catalog
        self.assembler = ResultAssembler(catalog, paging_policy)
        self.timeout_seconds = timeout_seconds
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    async def search(self, raw_params: Mapping[str, str | None]) -> ResultPage:
        """Run one search. Raises CatalogUnavailableError or SearchCancelledError."""
        request = plan_search(
            raw_params, self.default_page_size, self.max_page_size,
        )
        if self.timeout_seconds is None:
            return await self.execute(request)
        try:
            return await asyncio.wait_for(
                self.execute(request), timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"Search exceeded {self.timeout_seconds}s deadline",
                extra={"error_code": "SEARCH_CANCELLED", "page": request.page},
            )
            raise SearchCancelledError(
                self.timeout_seconds,
                ErrorContext(operation="search", search_text=request.free_text),
            )

    async def execute(self, request: SearchRequest) -> ResultPage:
        if request.has_search:
            return await self.assembler.assemble(request)
        return await execute_plain_query(self.catalog, request)
