"""Result Assembler — runs the tiered search path against a CatalogReader.

Invariants:
    - Catalog reads run sequentially: each step excludes what earlier steps collected
    - Exact-priority queries run in order name, generic_name, manufacturer and
      stop as soon as the budget is filled
    - The broader query runs only while slots remain, limited to those slots
    - total_matches counts every record eligible under the tier union plus
      filters, never just what was returned
    - No partial results: any catalog error propagates and the collected
      records are dropped with the call's local accumulator

Design Decisions:
    - BEST_MATCHES (default) ignores the page offset on this path: every page
      returns the same top page_size slice. RANKED_OFFSET assembles
      page * page_size ranked records and returns the last page_size of them.
      Both share every tier and assembly step; only the budget and the final
      slice differ
"""

import logging

from medcatalog.core.domain_types import PagingPolicy, SearchPath
from medcatalog.core.paginator import paginate
from medcatalog.core.query_planner import SearchRequest
from medcatalog.core.records import ResultPage
from medcatalog.core.repository_protocols import CatalogReader
from medcatalog.core.result_assembly import (
    EXACT_PRIORITY_FIELDS,
    CollectedRecords,
    broader_query,
    broader_sort,
    eligible_query,
    exact_priority_query,
)
from medcatalog.core.tier_matcher import build_tiers

logger = logging.getLogger(__name__)


class ResultAssembler:
    """Tiered search path executor."""

    def __init__(
        self,
        catalog: CatalogReader,
        paging_policy: PagingPolicy = PagingPolicy.BEST_MATCHES,
    ):
        self.catalog = catalog
        self.paging_policy = paging_policy

    async def assemble(self, request: SearchRequest) -> ResultPage:
        """Build the ranked page for a request with non-empty free text."""
        if not request.has_search:
            raise ValueError("ResultAssembler requires non-empty free text")

        tiers = build_tiers(request.free_text)
        collected = CollectedRecords(budget=self._budget(request))

        for catalog_field in EXACT_PRIORITY_FIELDS:
            if collected.is_full:
                break
            batch = await self.catalog.find(
                exact_priority_query(request, catalog_field, collected),
                limit=collected.remaining,
            )
            collected.extend(batch)

        if not collected.is_full:
            batch = await self.catalog.find(
                broader_query(request, tiers, collected),
                sort=broader_sort(request),
                limit=collected.remaining,
            )
            collected.extend(batch)

        total = await self.catalog.count(eligible_query(request, tiers))
        records = self._page_slice(request, collected)

        logger.info(
            "Search page assembled",
            extra={
                "search_path": SearchPath.SEARCH.value,
                "paging_policy": self.paging_policy.value,
                "total_matches": total,
                "returned": len(records),
                "page": request.page,
            },
        )
        return ResultPage(
            records=tuple(records),
            total_matches=total,
            page=request.page,
            page_size=request.page_size,
            page_info=paginate(total, request.page, request.page_size),
            search_path=SearchPath.SEARCH,
            paging_policy=self.paging_policy,
        )

    def _budget(self, request: SearchRequest) -> int:
        if self.paging_policy is PagingPolicy.RANKED_OFFSET:
            return request.page * request.page_size
        return request.page_size

    def _page_slice(self, request: SearchRequest, collected: CollectedRecords) -> list:
        if self.paging_policy is PagingPolicy.RANKED_OFFSET:
            return collected.records[request.offset:]
        return collected.records
