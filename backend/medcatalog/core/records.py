"""Record Value Types — what the core reads from the catalog and hands back.

Invariants:
    - MedicineRecord is immutable from the core's perspective (frozen)
    - ResultPage.records never holds two records with the same id
    - PriceBucket.upper is None only for the open-ended last bucket

Design Decisions:
    - Frozen dataclasses over ORM rows: the core never touches a session,
      and tests build records inline without a database
"""

from dataclasses import dataclass, field
from decimal import Decimal

from medcatalog.core.domain_types import (
    CatalogField, MedicineId, PagingPolicy, SearchPath,
)
from medcatalog.core.paginator import PageInfo


@dataclass(frozen=True)
class MedicineRecord:
    """One catalog entry as seen by the search engine."""
    id: MedicineId
    name: str
    generic_name: str
    manufacturer: str
    category: str
    unit: str
    unit_size: int
    price: Decimal
    strength: str | None = None
    slug: str | None = None

    def value_of(self, catalog_field: CatalogField) -> object:
        return getattr(self, catalog_field.value)


@dataclass(frozen=True)
class ResultPage:
    """An ordered page of records plus the size of the full eligible set."""
    records: tuple[MedicineRecord, ...]
    total_matches: int
    page: int
    page_size: int
    page_info: PageInfo
    search_path: SearchPath = SearchPath.PLAIN
    paging_policy: PagingPolicy | None = None

    @property
    def ids(self) -> list[MedicineId]:
        return [r.id for r in self.records]


@dataclass(frozen=True)
class PriceBucket:
    """Count of records whose value falls in [lower, upper)."""
    label: str
    lower: Decimal
    upper: Decimal | None
    count: int


@dataclass(frozen=True)
class PriceSummary:
    min_price: Decimal
    max_price: Decimal
    avg_price: Decimal


@dataclass(frozen=True)
class GroupStat:
    """Per-value aggregate for a grouping field (category, manufacturer)."""
    value: str
    count: int
    avg_price: Decimal = field(default=Decimal("0"))
