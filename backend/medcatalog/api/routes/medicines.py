"""Medicines Route — GET /api/v1/medicines, the catalog search endpoint.

Invariants:
    - Query parameters reach the planner as raw strings: malformed numbers fall
      back to defaults instead of failing validation
    - Only the recognized keys are forwarded

Design Decisions:
    - No typed Query() params: FastAPI would answer 422 for "page=abc", the
      planner recovers with the default instead
"""

import logging

from fastapi import APIRouter, Depends, Request

from medcatalog.api.dependencies import get_search_service
from medcatalog.schemas.medicine import MedicineListResponse
from medcatalog.services.catalog_search import CatalogSearchService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/medicines", tags=["medicines"])

SEARCH_PARAMS = (
    "page", "limit", "search", "category", "manufacturer",
    "minPrice", "maxPrice", "sortBy", "sortOrder",
)


@router.get("", response_model=MedicineListResponse)
async def list_medicines(
    request: Request,
    service: CatalogSearchService = Depends(get_search_service),
):
    """Search or browse the catalog with filters, sorting and pagination."""
    raw_params = {
        key: request.query_params[key]
        for key in SEARCH_PARAMS
        if key in request.query_params
    }
    page = await service.search(raw_params)
    return MedicineListResponse.from_page(page)
