"""Price Buckets — boundary lists to labeled half-open ranges.

Invariants:
    - Boundaries are strictly increasing; each bucket is [lower, upper)
    - The last bucket is open-ended ([last, inf)) when open_ended is True
    - Labels are stable strings ("0-10", "1000+") suitable as JSON keys
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

DEFAULT_PRICE_BOUNDARIES: tuple[Decimal, ...] = tuple(
    Decimal(b) for b in (0, 10, 25, 50, 100, 250, 500, 1000)
)


@dataclass(frozen=True)
class BucketRange:
    label: str
    lower: Decimal
    upper: Decimal | None

    def contains(self, value: Decimal) -> bool:
        if value < self.lower:
            return False
        return self.upper is None or value < self.upper


def bucket_ranges(
    boundaries: Sequence[Decimal], open_ended: bool = True,
) -> list[BucketRange]:
    """Turn boundaries into labeled ranges. Raises ValueError if not increasing."""
    bounds = [Decimal(b) for b in boundaries]
    if any(a >= b for a, b in zip(bounds, bounds[1:])):
        raise ValueError(f"Bucket boundaries must be strictly increasing: {bounds}")
    ranges = [
        BucketRange(f"{_fmt(lo)}-{_fmt(hi)}", lo, hi)
        for lo, hi in zip(bounds, bounds[1:])
    ]
    if open_ended and bounds:
        ranges.append(BucketRange(f"{_fmt(bounds[-1])}+", bounds[-1], None))
    return ranges


def _fmt(value: Decimal) -> str:
    return f"{value.normalize():f}"
