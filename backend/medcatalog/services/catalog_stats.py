"""Catalog Stats — filter options and summary statistics for the browser UI.

Invariants:
    - Pass-through aggregates only; no ranking logic
    - Empty catalog yields the fallback price range (0 / 1000 / 0)
    - Top lists are ordered by count descending, then value ascending
"""

from decimal import Decimal

from medcatalog.core.domain_types import CatalogField
from medcatalog.core.price_buckets import DEFAULT_PRICE_BOUNDARIES
from medcatalog.core.predicates import MATCH_ALL
from medcatalog.core.records import PriceSummary
from medcatalog.core.repository_protocols import CatalogReader

TOP_GROUPS_LIMIT = 10

FALLBACK_PRICE_SUMMARY = PriceSummary(
    min_price=Decimal("0"), max_price=Decimal("1000"), avg_price=Decimal("0"),
)


async def collect_filter_options(catalog: CatalogReader) -> dict:
    """Distinct categories and manufacturers plus the price range."""
    categories = await catalog.distinct_values(CatalogField.CATEGORY)
    manufacturers = await catalog.distinct_values(CatalogField.MANUFACTURER)
    summary = await catalog.price_summary() or FALLBACK_PRICE_SUMMARY
    return {
        "categories": categories,
        "manufacturers": manufacturers,
        "price_range": summary,
    }


async def collect_catalog_stats(catalog: CatalogReader) -> dict:
    """Total count, top categories / manufacturers and price distribution."""
    return {
        "total_medicines": await catalog.count(MATCH_ALL),
        "top_categories": await catalog.top_groups(
            CatalogField.CATEGORY, TOP_GROUPS_LIMIT,
        ),
        "top_manufacturers": await catalog.top_groups(
            CatalogField.MANUFACTURER, TOP_GROUPS_LIMIT,
        ),
        "price_ranges": await catalog.bucket_counts(
            CatalogField.PRICE, DEFAULT_PRICE_BOUNDARIES,
        ),
    }
