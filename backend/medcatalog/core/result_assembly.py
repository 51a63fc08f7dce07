"""Result Assembly — pure pieces of the tiered search path.

Invariants:
    - Exact-priority fields run in fixed order: name, generic_name, manufacturer
    - CollectedRecords never holds two records with the same id
    - CollectedRecords never grows past its budget
    - The broader query is sorted by name ascending first; the requested sort
      field is only a tiebreaker, followed by id for stable insertion order
    - Structured filters are ANDed onto every query, never reorder anything

Design Decisions:
    - The seen-set is an explicit accumulator threaded through the steps by the
      caller, not module state: one accumulator per search call
    - Budget is a parameter so the ranked-offset paging policy reuses the same
      steps with a larger budget
"""

from dataclasses import dataclass, field

from medcatalog.core.domain_types import CatalogField, MatchKind, MedicineId
from medcatalog.core.predicates import (
    AllOf, ExcludeIds, FieldMatch, PriceRange, SortKey, all_of,
)
from medcatalog.core.query_planner import SearchRequest
from medcatalog.core.records import MedicineRecord
from medcatalog.core.tier_matcher import MatchTier, tier_union

EXACT_PRIORITY_FIELDS = (
    CatalogField.NAME, CatalogField.GENERIC_NAME, CatalogField.MANUFACTURER,
)


@dataclass
class CollectedRecords:
    """Ordered, deduplicated records gathered across the assembly steps."""
    budget: int
    records: list[MedicineRecord] = field(default_factory=list)
    seen: set[MedicineId] = field(default_factory=set)

    @property
    def remaining(self) -> int:
        return self.budget - len(self.records)

    @property
    def is_full(self) -> bool:
        return self.remaining <= 0

    def exclusion(self) -> ExcludeIds:
        return ExcludeIds(frozenset(self.seen))

    def extend(self, batch: list[MedicineRecord]) -> int:
        """Append unseen records up to the budget. Returns how many were added."""
        added = 0
        for record in batch:
            if self.is_full:
                break
            if record.id in self.seen:
                continue
            self.records.append(record)
            self.seen.add(record.id)
            added += 1
        return added


def structured_filters(request: SearchRequest) -> AllOf:
    """Category / manufacturer substring and price range, ANDed together."""
    members = []
    if request.category:
        members.append(FieldMatch(
            CatalogField.CATEGORY, MatchKind.CONTAINS, request.category.lower(),
        ))
    if request.manufacturer:
        members.append(FieldMatch(
            CatalogField.MANUFACTURER, MatchKind.CONTAINS,
            request.manufacturer.lower(),
        ))
    if request.min_price is not None or request.max_price is not None:
        members.append(PriceRange(request.min_price, request.max_price))
    return AllOf(tuple(members))


def exact_priority_query(
    request: SearchRequest, catalog_field: CatalogField, collected: CollectedRecords,
) -> AllOf:
    """Exact match on one field, filtered, excluding already-collected ids."""
    return all_of(
        FieldMatch(catalog_field, MatchKind.EXACT, request.free_text),
        structured_filters(request),
        collected.exclusion(),
    )


def eligible_query(request: SearchRequest, tiers: list[MatchTier]) -> AllOf:
    """Union of all tiers plus filters: the set total_matches counts."""
    return all_of(tier_union(tiers), structured_filters(request))


def broader_query(
    request: SearchRequest, tiers: list[MatchTier], collected: CollectedRecords,
) -> AllOf:
    return all_of(eligible_query(request, tiers), collected.exclusion())


def broader_sort(request: SearchRequest) -> tuple[SortKey, ...]:
    keys = [SortKey(CatalogField.NAME)]
    if request.sort_field is not CatalogField.NAME:
        keys.append(SortKey(request.sort_field, request.sort_descending))
    return tuple(keys)


def plain_sort(request: SearchRequest) -> tuple[SortKey, ...]:
    return (SortKey(request.sort_field, request.sort_descending),)
