"""Catalog Factory — Medicine row builders shared by service tests.

Design Decisions:
    - Plain dicts of column values: seeded through the ORM by the
      seed_medicines fixture, in list order
"""

from decimal import Decimal


def medicine(name: str, **overrides) -> dict:
    """Column values for one Medicine row with sensible defaults."""
    values = dict(
        name=name,
        slug=name.lower().replace(" ", "-"),
        generic_name="Paracetamol",
        manufacturer="Square Pharmaceuticals PLC",
        category="Tablet",
        strength="500 mg",
        unit="Strip",
        unit_size=10,
        price=Decimal("5"),
    )
    values.update(overrides)
    return values


NAPA_CATALOG = [
    medicine(
        "Napa", generic_name="Paracetamol", price=Decimal("5"),
        manufacturer="Beximco Pharmaceuticals Ltd.",
    ),
    medicine(
        "Napa Extra", generic_name="Paracetamol + Caffeine", price=Decimal("8"),
        manufacturer="Beximco Pharmaceuticals Ltd.", strength="500 mg+65 mg",
    ),
    medicine(
        "Seclo", generic_name="Omeprazole", price=Decimal("12"),
        category="Capsule", strength="20 mg",
    ),
]


def numbered(prefix: str, count: int, **overrides) -> list[dict]:
    """count rows named '<prefix> 01'..; slugs stay unique."""
    return [
        medicine(f"{prefix} {i:02d}", slug=f"{prefix.lower()}-{i:02d}", **overrides)
        for i in range(1, count + 1)
    ]
