"""Tier Matcher — normalized free text in, ordered match tiers out.

Invariants:
    - Input text is non-empty, trimmed and lower-cased
    - Tiers are ordered most specific first
    - Within a tier, field priority is always name, generic_name, manufacturer
      (then strength, category where listed)
    - Short text (<= 2 chars) never yields EXACT or CONTAINS tiers
    - Multi-word text yields exactly one flat CONTAINS tier: every token in
      input order, each over the five text fields, all OR-ed together

Design Decisions:
    - Tiers are data (field + kind pairs), not branches: the policy is tested
      and changed here, execution lives in the result assembler
    - No cross-token exact/prefix logic for multi-word text: ordering of the
      broader query depends on this flat shape, so it is kept as-is
"""

from dataclasses import dataclass

from medcatalog.core.domain_types import CatalogField, MatchKind
from medcatalog.core.predicates import AnyOf, FieldMatch

SHORT_TEXT_MAX_LEN = 2

_NAME_FIELDS = (
    CatalogField.NAME, CatalogField.GENERIC_NAME, CatalogField.MANUFACTURER,
)
_NAME_AND_STRENGTH = _NAME_FIELDS + (CatalogField.STRENGTH,)
_ALL_TEXT_FIELDS = _NAME_AND_STRENGTH + (CatalogField.CATEGORY,)


@dataclass(frozen=True)
class TierClause:
    field: CatalogField
    kind: MatchKind
    term: str


@dataclass(frozen=True)
class MatchTier:
    """An OR-group of clauses evaluated together as one predicate."""
    clauses: tuple[TierClause, ...]

    def to_predicate(self) -> AnyOf:
        return AnyOf(tuple(
            FieldMatch(c.field, c.kind, c.term) for c in self.clauses
        ))


def _tier(kind: MatchKind, fields: tuple[CatalogField, ...], term: str) -> MatchTier:
    return MatchTier(tuple(TierClause(f, kind, term) for f in fields))


def build_tiers(text: str) -> list[MatchTier]:
    """Return the ordered match tiers for normalized free text."""
    tokens = text.split()
    if not tokens:
        return []
    if len(tokens) > 1:
        return [MatchTier(tuple(
            TierClause(f, MatchKind.CONTAINS, token)
            for token in tokens
            for f in _ALL_TEXT_FIELDS
        ))]
    term = tokens[0]
    if len(term) <= SHORT_TEXT_MAX_LEN:
        return [
            _tier(MatchKind.PREFIX, _NAME_FIELDS, term),
            _tier(MatchKind.WORD_BOUNDARY, _NAME_AND_STRENGTH, term),
        ]
    return [
        _tier(MatchKind.EXACT, _NAME_FIELDS, term),
        _tier(MatchKind.PREFIX, _NAME_FIELDS, term),
        _tier(MatchKind.WORD_BOUNDARY, _NAME_AND_STRENGTH, term),
        _tier(MatchKind.CONTAINS, _ALL_TEXT_FIELDS, term),
    ]


def tier_union(tiers: list[MatchTier]) -> AnyOf:
    """OR of every tier, preserving tier and clause order."""
    return AnyOf(tuple(t.to_predicate() for t in tiers))
