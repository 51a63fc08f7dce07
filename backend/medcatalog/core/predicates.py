"""Catalog Predicates — storage-agnostic query values built by the core.

Invariants:
    - Predicates are immutable values; the core never renders SQL or regex
    - AnyOf() with no members matches nothing; AllOf() with no members matches everything
    - Structured filters are the same AllOf for the search and plain paths

Design Decisions:
    - Data over control flow: a tier is a value the catalog translates, so the
      matching policy can be tested without a database
    - The catalog owns case-insensitivity and escaping; FieldMatch.text is the
      normalized (lower-cased) term
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from medcatalog.core.domain_types import CatalogField, MatchKind, MedicineId


@dataclass(frozen=True)
class FieldMatch:
    """Case-insensitive pattern match of one text field against one term."""
    field: CatalogField
    kind: MatchKind
    text: str


@dataclass(frozen=True)
class PriceRange:
    """Inclusive price bounds; a None bound is open."""
    min_price: Decimal | None = None
    max_price: Decimal | None = None


@dataclass(frozen=True)
class ExcludeIds:
    """Matches records whose id is NOT in ids."""
    ids: frozenset[MedicineId]


@dataclass(frozen=True)
class AnyOf:
    members: tuple["Predicate", ...]


@dataclass(frozen=True)
class AllOf:
    members: tuple["Predicate", ...]


Predicate = Union[FieldMatch, PriceRange, ExcludeIds, AnyOf, AllOf]

MATCH_ALL = AllOf(())


@dataclass(frozen=True)
class SortKey:
    field: CatalogField
    descending: bool = False


def all_of(*members: Predicate) -> AllOf:
    """AllOf that drops no-op members (empty AllOf, empty ExcludeIds)."""
    kept = tuple(
        m for m in members
        if not (isinstance(m, AllOf) and not m.members)
        and not (isinstance(m, ExcludeIds) and not m.ids)
    )
    return AllOf(kept)


def matches(predicate: Predicate, record) -> bool:
    """Evaluate a predicate against an in-memory record.

    Mirrors the catalog's SQL translation; used by tests and by anything
    that must filter already-loaded records.
    """
    if isinstance(predicate, AllOf):
        return all(matches(m, record) for m in predicate.members)
    if isinstance(predicate, AnyOf):
        return any(matches(m, record) for m in predicate.members)
    if isinstance(predicate, ExcludeIds):
        return record.id not in predicate.ids
    if isinstance(predicate, PriceRange):
        if predicate.min_price is not None and record.price < predicate.min_price:
            return False
        if predicate.max_price is not None and record.price > predicate.max_price:
            return False
        return True
    if isinstance(predicate, FieldMatch):
        value = record.value_of(predicate.field)
        if value is None:
            return False
        return text_matches(str(value), predicate.kind, predicate.text)
    raise TypeError(f"Unknown predicate: {predicate!r}")


def text_matches(value: str, kind: MatchKind, term: str) -> bool:
    """Case-insensitive match of term against value at the given strictness."""
    value = value.lower()
    term = term.lower()
    if kind is MatchKind.EXACT:
        return value == term
    if kind is MatchKind.PREFIX:
        return value.startswith(term)
    if kind is MatchKind.CONTAINS:
        return term in value
    # WORD_BOUNDARY: string start or after a non-[a-z0-9] character
    start = value.find(term)
    while start != -1:
        if start == 0 or not _is_word_char(value[start - 1]):
            return True
        start = value.find(term, start + 1)
    return False


def _is_word_char(char: str) -> bool:
    return char.isascii() and char.isalnum()
