"""SqlCatalog tests — predicate translation and aggregates against SQLite.

Tests cover:
    - Each match kind is case-insensitive, non-ASCII letters included
    - WORD_BOUNDARY via REGEXP: start of string or after a non-alphanumeric char
    - LIKE wildcards and regex metacharacters in user text are literal
    - NULL strength never matches
    - Sort keys then id ascending; skip/limit
    - count, distinct_values, bucket_counts, price_summary, top_groups
    - SQLAlchemy failures surface as CatalogUnavailableError
"""

from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from medcatalog.core.domain_types import CatalogField, MatchKind
from medcatalog.core.errors import CatalogUnavailableError
from medcatalog.core.predicates import (
    MATCH_ALL, AnyOf, ExcludeIds, FieldMatch, PriceRange, SortKey, text_matches,
)
from medcatalog.core.price_buckets import DEFAULT_PRICE_BOUNDARIES
from medcatalog.infrastructure.sql_catalog import SqlCatalog

from tests.services.catalog_factory import medicine


def _names(records):
    return [r.name for r in records]


async def test_exact_match_is_case_insensitive(catalog, napa_catalog):
    found = await catalog.find(FieldMatch(CatalogField.NAME, MatchKind.EXACT, "napa"))
    assert _names(found) == ["Napa"]


async def test_prefix_match(catalog, napa_catalog):
    found = await catalog.find(FieldMatch(CatalogField.NAME, MatchKind.PREFIX, "nap"))
    assert _names(found) == ["Napa", "Napa Extra"]


async def test_contains_match(catalog, napa_catalog):
    found = await catalog.find(
        FieldMatch(CatalogField.GENERIC_NAME, MatchKind.CONTAINS, "caff"),
    )
    assert _names(found) == ["Napa Extra"]


async def test_word_boundary_match(catalog, seed_medicines):
    await seed_medicines([
        medicine("Omgx", strength="1 g"),
        medicine("Zinc", strength="20 mg"),
        medicine("Mgsol", strength="5 g"),
        medicine("Combo", strength="500mg+65-mg"),
    ])
    found = await catalog.find(AnyOf((
        FieldMatch(CatalogField.NAME, MatchKind.WORD_BOUNDARY, "mg"),
        FieldMatch(CatalogField.STRENGTH, MatchKind.WORD_BOUNDARY, "mg"),
    )))
    assert _names(found) == ["Zinc", "Mgsol", "Combo"]


async def test_like_wildcards_in_text_are_literal(catalog, seed_medicines):
    await seed_medicines([
        medicine("Zinc 10% Cream"),
        medicine("Zinc 100 Cream"),
        medicine("Zinc_Oxide"),
        medicine("ZincXOxide"),
    ])
    percent = await catalog.find(FieldMatch(CatalogField.NAME, MatchKind.CONTAINS, "10%"))
    underscore = await catalog.find(FieldMatch(CatalogField.NAME, MatchKind.PREFIX, "zinc_"))
    assert _names(percent) == ["Zinc 10% Cream"]
    assert _names(underscore) == ["Zinc_Oxide"]


async def test_non_ascii_text_folds_case_for_every_match_kind(catalog, seed_medicines):
    await seed_medicines([medicine("Érgocal"), medicine("Zinc Äqua")])
    cases = [
        (MatchKind.EXACT, "ÉRGOCAL", ["Érgocal"]),
        (MatchKind.PREFIX, "érg", ["Érgocal"]),
        (MatchKind.CONTAINS, "NC ÄQ", ["Zinc Äqua"]),
        (MatchKind.WORD_BOUNDARY, "ÄQUA", ["Zinc Äqua"]),
    ]
    for kind, term, expected in cases:
        found = await catalog.find(FieldMatch(CatalogField.NAME, kind, term.lower()))
        assert _names(found) == expected, kind
        assert all(text_matches(r.name, kind, term.lower()) for r in found)


async def test_regex_metacharacters_in_text_are_literal(catalog, seed_medicines):
    await seed_medicines([medicine("Vit (B+C)"), medicine("Vit B")])
    found = await catalog.find(
        FieldMatch(CatalogField.NAME, MatchKind.WORD_BOUNDARY, "(b+c)"),
    )
    assert _names(found) == ["Vit (B+C)"]


async def test_null_strength_never_matches(catalog, seed_medicines):
    await seed_medicines([medicine("Orsaline", strength=None)])
    found = await catalog.find(
        FieldMatch(CatalogField.STRENGTH, MatchKind.CONTAINS, ""),
    )
    assert found == []


async def test_price_range_is_inclusive(catalog, napa_catalog):
    found = await catalog.find(PriceRange(Decimal("5"), Decimal("8")))
    assert _names(found) == ["Napa", "Napa Extra"]


async def test_exclude_ids(catalog, napa_catalog):
    found = await catalog.find(ExcludeIds(frozenset({napa_catalog[0].id})))
    assert _names(found) == ["Napa Extra", "Seclo"]


async def test_sort_then_id_breaks_ties(catalog, seed_medicines):
    await seed_medicines([
        medicine("B", price=Decimal("5")),
        medicine("A", price=Decimal("9")),
        medicine("C", price=Decimal("5")),
    ])
    found = await catalog.find(MATCH_ALL, sort=[SortKey(CatalogField.PRICE)])
    assert _names(found) == ["B", "C", "A"]
    found = await catalog.find(MATCH_ALL, sort=[SortKey(CatalogField.PRICE, True)])
    assert _names(found) == ["A", "B", "C"]


async def test_skip_and_limit(catalog, napa_catalog):
    found = await catalog.find(
        MATCH_ALL, sort=[SortKey(CatalogField.NAME)], skip=1, limit=1,
    )
    assert _names(found) == ["Napa Extra"]


async def test_count(catalog, napa_catalog):
    assert await catalog.count(MATCH_ALL) == 3
    assert await catalog.count(AnyOf(())) == 0


async def test_records_carry_decimal_price(catalog, napa_catalog):
    (seclo,) = await catalog.find(FieldMatch(CatalogField.NAME, MatchKind.EXACT, "seclo"))
    assert seclo.price == Decimal("12")
    assert seclo.strength == "20 mg"


async def test_distinct_values_sorted(catalog, napa_catalog):
    assert await catalog.distinct_values(CatalogField.CATEGORY) == ["Capsule", "Tablet"]
    assert await catalog.distinct_values(CatalogField.MANUFACTURER) == [
        "Beximco Pharmaceuticals Ltd.", "Square Pharmaceuticals PLC",
    ]


async def test_bucket_counts(catalog, seed_medicines):
    await seed_medicines([
        medicine("A", price=Decimal("0")),
        medicine("B", price=Decimal("9.99")),
        medicine("C", price=Decimal("10")),
        medicine("D", price=Decimal("1500")),
    ])
    buckets = await catalog.bucket_counts(CatalogField.PRICE, DEFAULT_PRICE_BOUNDARIES)
    counts = {b.label: b.count for b in buckets}
    assert counts["0-10"] == 2
    assert counts["10-25"] == 1
    assert counts["1000+"] == 1
    assert sum(counts.values()) == 4


async def test_bucket_counts_on_empty_catalog_are_zero(catalog):
    buckets = await catalog.bucket_counts(CatalogField.PRICE, DEFAULT_PRICE_BOUNDARIES)
    assert all(b.count == 0 for b in buckets)


async def test_price_summary(catalog, napa_catalog):
    summary = await catalog.price_summary()
    assert summary.min_price == Decimal("5")
    assert summary.max_price == Decimal("12")
    assert summary.avg_price == Decimal("8.33")


async def test_price_summary_on_empty_catalog_is_none(catalog):
    assert await catalog.price_summary() is None


async def test_top_groups_by_count_then_value(catalog, napa_catalog):
    groups = await catalog.top_groups(CatalogField.CATEGORY, 10)
    assert [(g.value, g.count) for g in groups] == [("Tablet", 2), ("Capsule", 1)]
    assert groups[0].avg_price == Decimal("6.50")


class _BrokenSession:
    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection reset"))


async def test_sqlalchemy_errors_map_to_catalog_unavailable():
    catalog = SqlCatalog(_BrokenSession())
    with pytest.raises(CatalogUnavailableError) as excinfo:
        await catalog.count(MATCH_ALL)
    assert excinfo.value.retryable
    assert excinfo.value.operation == "count"
    assert excinfo.value.http_status == 503
