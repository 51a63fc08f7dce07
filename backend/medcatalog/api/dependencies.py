"""Route Dependencies — catalog and search service wiring per request.

Invariants:
    - One AsyncSession (and so one SqlCatalog) per request
    - Search service settings come from get_settings(), never from the request
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from medcatalog.config import get_settings
from medcatalog.infrastructure.database import get_db
from medcatalog.infrastructure.sql_catalog import SqlCatalog
from medcatalog.services.catalog_search import CatalogSearchService


def get_catalog(db: AsyncSession = Depends(get_db)) -> SqlCatalog:
    return SqlCatalog(db)


def get_search_service(
    catalog: SqlCatalog = Depends(get_catalog),
) -> CatalogSearchService:
    settings = get_settings()
    return CatalogSearchService(
        catalog,
        paging_policy=settings.search_paging_policy,
        timeout_seconds=settings.search_timeout_seconds,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )
