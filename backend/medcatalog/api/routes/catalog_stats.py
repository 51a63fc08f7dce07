"""Catalog Stats Routes — filter options and summary statistics.

Invariants:
    - GET /api/v1/filters returns sorted categories, manufacturers and price range
    - GET /api/v1/stats returns totals, top groups and price distribution
"""

from fastapi import APIRouter, Depends

from medcatalog.api.dependencies import get_catalog
from medcatalog.infrastructure.sql_catalog import SqlCatalog
from medcatalog.schemas.medicine import (
    CatalogStatsResponse,
    FilterOptionsResponse,
    GroupStatOut,
    PriceBucketOut,
    PriceRangeOut,
)
from medcatalog.services.catalog_stats import (
    collect_catalog_stats, collect_filter_options,
)

router = APIRouter(prefix="/api/v1", tags=["catalog-stats"])


@router.get("/filters", response_model=FilterOptionsResponse)
async def get_filter_options(catalog: SqlCatalog = Depends(get_catalog)):
    options = await collect_filter_options(catalog)
    return FilterOptionsResponse(
        categories=options["categories"],
        manufacturers=options["manufacturers"],
        price_range=PriceRangeOut.from_summary(options["price_range"]),
    )


@router.get("/stats", response_model=CatalogStatsResponse)
async def get_catalog_stats(catalog: SqlCatalog = Depends(get_catalog)):
    stats = await collect_catalog_stats(catalog)
    return CatalogStatsResponse(
        total_medicines=stats["total_medicines"],
        top_categories=[GroupStatOut.from_stat(s) for s in stats["top_categories"]],
        top_manufacturers=[
            GroupStatOut.from_stat(s) for s in stats["top_manufacturers"]
        ],
        price_ranges=[PriceBucketOut.from_bucket(b) for b in stats["price_ranges"]],
    )
