"""Medicine Schemas — Pydantic response models for the catalog API.

Invariants:
    - Response shapes keep the browser's contract: {medicines, pagination}
      with pagination {current, pages, total, limit}
    - Prices serialize as JSON numbers

Design Decisions:
    - Built from core value types via from_* classmethods: routes stay thin
"""

from pydantic import BaseModel

from medcatalog.core.records import (
    GroupStat, MedicineRecord, PriceBucket, PriceSummary, ResultPage,
)


class MedicineOut(BaseModel):
    """One catalog record as returned to clients."""
    id: int
    name: str
    generic_name: str
    manufacturer: str
    category: str
    strength: str | None = None
    unit: str
    unit_size: int
    price: float
    slug: str | None = None

    @classmethod
    def from_record(cls, record: MedicineRecord) -> "MedicineOut":
        return cls(
            id=record.id,
            name=record.name,
            generic_name=record.generic_name,
            manufacturer=record.manufacturer,
            category=record.category,
            strength=record.strength,
            unit=record.unit,
            unit_size=record.unit_size,
            price=float(record.price),
            slug=record.slug,
        )


class Pagination(BaseModel):
    current: int
    pages: int
    total: int
    limit: int


class MedicineListResponse(BaseModel):
    medicines: list[MedicineOut]
    pagination: Pagination

    @classmethod
    def from_page(cls, page: ResultPage) -> "MedicineListResponse":
        info = page.page_info
        return cls(
            medicines=[MedicineOut.from_record(r) for r in page.records],
            pagination=Pagination(
                current=info.page,
                pages=info.pages,
                total=info.total_matches,
                limit=info.page_size,
            ),
        )


class PriceRangeOut(BaseModel):
    min_price: float
    max_price: float
    avg_price: float

    @classmethod
    def from_summary(cls, summary: PriceSummary) -> "PriceRangeOut":
        return cls(
            min_price=float(summary.min_price),
            max_price=float(summary.max_price),
            avg_price=float(summary.avg_price),
        )


class FilterOptionsResponse(BaseModel):
    categories: list[str]
    manufacturers: list[str]
    price_range: PriceRangeOut


class GroupStatOut(BaseModel):
    value: str
    count: int
    avg_price: float

    @classmethod
    def from_stat(cls, stat: GroupStat) -> "GroupStatOut":
        return cls(value=stat.value, count=stat.count, avg_price=float(stat.avg_price))


class PriceBucketOut(BaseModel):
    label: str
    lower: float
    upper: float | None = None
    count: int

    @classmethod
    def from_bucket(cls, bucket: PriceBucket) -> "PriceBucketOut":
        return cls(
            label=bucket.label,
            lower=float(bucket.lower),
            upper=float(bucket.upper) if bucket.upper is not None else None,
            count=bucket.count,
        )


class CatalogStatsResponse(BaseModel):
    total_medicines: int
    top_categories: list[GroupStatOut]
    top_manufacturers: list[GroupStatOut]
    price_ranges: list[PriceBucketOut]
