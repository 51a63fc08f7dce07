"""Tests for parse_medicine_row — CSV row to column values, no IO."""

from decimal import Decimal

from medcatalog.core.medicine_rows import parse_medicine_row


def _row(**overrides) -> dict:
    row = {
        "medicine_name": "Napa", "category_name": "Tablet", "slug": "napa-500",
        "generic_name": "Paracetamol", "strength": "500 mg",
        "manufacturer_name": "Beximco Pharmaceuticals Ltd.", "unit": "Strip",
        "unit_size": "10", "price": "8.00",
    }
    row.update(overrides)
    return row


def test_maps_source_columns_to_catalog_fields():
    parsed = parse_medicine_row(_row())
    assert parsed == {
        "name": "Napa", "category": "Tablet", "slug": "napa-500",
        "generic_name": "Paracetamol", "strength": "500 mg",
        "manufacturer": "Beximco Pharmaceuticals Ltd.", "unit": "Strip",
        "unit_size": 10, "price": Decimal("8.00"),
    }


def test_blank_strength_becomes_none():
    assert parse_medicine_row(_row(strength="  "))["strength"] is None
    assert parse_medicine_row(_row(strength=None))["strength"] is None


def test_bad_unit_size_defaults_to_one():
    assert parse_medicine_row(_row(unit_size="ten"))["unit_size"] == 1
    assert parse_medicine_row(_row(unit_size="0"))["unit_size"] == 1


def test_unit_size_keeps_leading_integer():
    assert parse_medicine_row(_row(unit_size="12.5"))["unit_size"] == 12
    assert parse_medicine_row(_row(unit_size="10 tablets"))["unit_size"] == 10
    assert parse_medicine_row(_row(unit_size=" 30"))["unit_size"] == 30
    assert parse_medicine_row(_row(unit_size="-3"))["unit_size"] == 1
    assert parse_medicine_row(_row(unit_size="x10"))["unit_size"] == 1


def test_bad_price_defaults_to_zero():
    assert parse_medicine_row(_row(price="n/a"))["price"] == Decimal("0")
    assert parse_medicine_row(_row(price="-4"))["price"] == Decimal("0")
    assert parse_medicine_row(_row(price=""))["price"] == Decimal("0")


def test_text_fields_are_trimmed():
    assert parse_medicine_row(_row(medicine_name="  Napa  "))["name"] == "Napa"
