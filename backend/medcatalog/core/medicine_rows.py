"""Medicine Rows — source CSV row to catalog column values.

Invariants:
    - Pure: a dict in, a dict out
    - Blank strength becomes None
    - unit_size keeps the leading integer of the cell; none, or non-positive, becomes 1
    - Unparsable or negative price becomes 0
"""

import re
from decimal import Decimal, InvalidOperation

_LEADING_INT = re.compile(r"[+-]?\d+")

CSV_COLUMNS = (
    "medicine_name", "category_name", "slug", "generic_name", "strength",
    "manufacturer_name", "unit", "unit_size", "price",
)


def parse_medicine_row(row: dict[str, str]) -> dict:
    """Map one CSV row to Medicine column values."""
    return {
        "name": _text(row.get("medicine_name")),
        "category": _text(row.get("category_name")),
        "slug": _text(row.get("slug")),
        "generic_name": _text(row.get("generic_name")),
        "strength": _text(row.get("strength")) or None,
        "manufacturer": _text(row.get("manufacturer_name")),
        "unit": _text(row.get("unit")),
        "unit_size": _unit_size(row.get("unit_size")),
        "price": _price(row.get("price")),
    }


def _text(raw: str | None) -> str:
    return (raw or "").strip()


def _unit_size(raw: str | None) -> int:
    """Leading integer of the cell ("12.5" → 12, "10 tablets" → 10); else 1."""
    match = _LEADING_INT.match(_text(raw))
    if not match:
        return 1
    value = int(match.group())
    return value if value > 0 else 1


def _price(raw: str | None) -> Decimal:
    try:
        value = Decimal(_text(raw))
    except InvalidOperation:
        return Decimal("0")
    if not value.is_finite() or value < 0:
        return Decimal("0")
    return value
