"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All catalog reads accessed through the CatalogReader Protocol
    - Implementations provided by shell via dependency injection
    - Every read is non-mutating; concurrent requests may share nothing else

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no base class
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that build the predicates are never async themselves —
      the shell orchestrates the async calls around the pure logic
    - find() always appends id ascending after the given sort keys, so ties
      resolve by insertion order
"""

from decimal import Decimal
from typing import Protocol, Sequence

from medcatalog.core.domain_types import CatalogField
from medcatalog.core.predicates import Predicate, SortKey
from medcatalog.core.records import GroupStat, MedicineRecord, PriceBucket, PriceSummary


class CatalogReader(Protocol):
    """Read capability over the medicine catalog — implemented by shell."""
    async def find(
        self,
        predicate: Predicate,
        sort: Sequence[SortKey] = (),
        skip: int = 0,
        limit: int | None = None,
    ) -> list[MedicineRecord]: ...
    async def count(self, predicate: Predicate) -> int: ...
    async def distinct_values(self, field: CatalogField) -> list[str]: ...
    async def bucket_counts(
        self, field: CatalogField, boundaries: Sequence[Decimal],
    ) -> list[PriceBucket]: ...
    async def price_summary(self) -> PriceSummary | None: ...
    async def top_groups(
        self, field: CatalogField, limit: int,
    ) -> list[GroupStat]: ...
