"""Plain Query Executor — the no-search-text path.

Invariants:
    - Only structured filters decide eligibility
    - Sorted by the requested field (single key), ties by insertion order
    - skip = (page - 1) * page_size, take = page_size
    - total_matches = count of records matching the filters
"""

import logging

from medcatalog.core.domain_types import SearchPath
from medcatalog.core.paginator import paginate
from medcatalog.core.query_planner import SearchRequest
from medcatalog.core.records import ResultPage
from medcatalog.core.repository_protocols import CatalogReader
from medcatalog.core.result_assembly import plain_sort, structured_filters

logger = logging.getLogger(__name__)


async def execute_plain_query(
    catalog: CatalogReader, request: SearchRequest,
) -> ResultPage:
    """Filter, sort, skip and limit directly against the catalog."""
    filters = structured_filters(request)
    records = await catalog.find(
        filters,
        sort=plain_sort(request),
        skip=request.offset,
        limit=request.page_size,
    )
    total = await catalog.count(filters)
    logger.info(
        "Plain page fetched",
        extra={
            "search_path": SearchPath.PLAIN.value,
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
        search_path=SearchPath.PLAIN,
    )
