"""SQL Catalog — CatalogReader over the medicines table via SQLAlchemy.

Invariants:
    - Read-only: never adds, flushes or commits
    - Every text match is case-insensitive: lower(column) against the lower-cased
      term. On SQLite, lower() is the Unicode-aware function from db/session.py
    - LIKE wildcards in user text are escaped (autoescape); regex metacharacters
      are escaped with re.escape
    - find() orders by the given sort keys then id ascending (insertion order)
    - Every SQLAlchemyError is mapped to CatalogUnavailableError and logged

Design Decisions:
    - WORD_BOUNDARY renders as a regular expression on lower(column):
      (^|[^a-z0-9])term. PostgreSQL runs it natively (~); SQLAlchemy registers a
      Python REGEXP function on SQLite connections
    - Predicate translation is a single recursive function so every path
      (search, plain, count) shares one rendering
"""

import logging
import re
from contextlib import asynccontextmanager
from decimal import Decimal
from typing import AsyncGenerator, Sequence

from sqlalchemy import (
    ColumnElement, and_, case, false, func, or_, select, true,
)
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from medcatalog.core.domain_types import CatalogField, MatchKind
from medcatalog.core.errors import CatalogUnavailableError, ErrorContext
from medcatalog.core.predicates import (
    AllOf, AnyOf, ExcludeIds, FieldMatch, Predicate, PriceRange, SortKey,
)
from medcatalog.core.price_buckets import bucket_ranges
from medcatalog.core.records import (
    GroupStat, MedicineRecord, PriceBucket, PriceSummary,
)
from medcatalog.models.medicine import Medicine

logger = logging.getLogger(__name__)

_COLUMNS = {
    CatalogField.NAME: Medicine.name,
    CatalogField.GENERIC_NAME: Medicine.generic_name,
    CatalogField.MANUFACTURER: Medicine.manufacturer,
    CatalogField.CATEGORY: Medicine.category,
    CatalogField.STRENGTH: Medicine.strength,
    CatalogField.UNIT: Medicine.unit,
    CatalogField.UNIT_SIZE: Medicine.unit_size,
    CatalogField.PRICE: Medicine.price,
}


def render_predicate(predicate: Predicate) -> ColumnElement[bool]:
    """Translate a core predicate into a SQLAlchemy boolean expression."""
    if isinstance(predicate, AllOf):
        if not predicate.members:
            return true()
        return and_(*(render_predicate(m) for m in predicate.members))
    if isinstance(predicate, AnyOf):
        if not predicate.members:
            return false()
        return or_(*(render_predicate(m) for m in predicate.members))
    if isinstance(predicate, ExcludeIds):
        if not predicate.ids:
            return true()
        return Medicine.id.not_in(sorted(predicate.ids))
    if isinstance(predicate, PriceRange):
        clauses = []
        if predicate.min_price is not None:
            clauses.append(Medicine.price >= predicate.min_price)
        if predicate.max_price is not None:
            clauses.append(Medicine.price <= predicate.max_price)
        return and_(true(), *clauses)
    if isinstance(predicate, FieldMatch):
        return _render_match(predicate)
    raise TypeError(f"Unknown predicate: {predicate!r}")


def _render_match(match: FieldMatch) -> ColumnElement[bool]:
    column = func.lower(_COLUMNS[match.field])
    term = match.text.lower()
    if match.kind is MatchKind.EXACT:
        return column == term
    if match.kind is MatchKind.PREFIX:
        return column.startswith(term, autoescape=True)
    if match.kind is MatchKind.CONTAINS:
        return column.contains(term, autoescape=True)
    return column.regexp_match(f"(^|[^a-z0-9]){re.escape(term)}")


def render_sort(sort: Sequence[SortKey]) -> list:
    order = []
    for key in sort:
        column = _COLUMNS[key.field]
        order.append(column.desc() if key.descending else column.asc())
    order.append(Medicine.id.asc())
    return order


class SqlCatalog:
    """CatalogReader backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find(
        self,
        predicate: Predicate,
        sort: Sequence[SortKey] = (),
        skip: int = 0,
        limit: int | None = None,
    ) -> list[MedicineRecord]:
        """Matching records in sort order, then by id."""
        query = (
            select(Medicine)
            .where(render_predicate(predicate))
            .order_by(*render_sort(sort))
        )
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        async with self._reading("find"):
            result = await self.db.execute(query)
            return [row.to_record() for row in result.scalars().all()]

    async def count(self, predicate: Predicate) -> int:
        query = (
            select(func.count())
            .select_from(Medicine)
            .where(render_predicate(predicate))
        )
        async with self._reading("count"):
            result = await self.db.execute(query)
            return int(result.scalar_one())

    async def distinct_values(self, field: CatalogField) -> list[str]:
        """Distinct non-null values of a field, sorted ascending."""
        column = _COLUMNS[field]
        query = (
            select(column).where(column.is_not(None)).distinct().order_by(column)
        )
        async with self._reading("distinct_values"):
            result = await self.db.execute(query)
            return [str(v) for v in result.scalars().all()]

    async def bucket_counts(
        self, field: CatalogField, boundaries: Sequence[Decimal],
    ) -> list[PriceBucket]:
        """Counts per [lower, upper) bucket; the last bucket is open-ended."""
        column = _COLUMNS[field]
        ranges = bucket_ranges(boundaries)
        if not ranges:
            return []
        sums = []
        for r in ranges:
            cond = column >= r.lower
            if r.upper is not None:
                cond = and_(cond, column < r.upper)
            sums.append(func.coalesce(func.sum(case((cond, 1), else_=0)), 0))
        async with self._reading("bucket_counts"):
            result = await self.db.execute(select(*sums).select_from(Medicine))
            counts = result.one()
        return [
            PriceBucket(r.label, r.lower, r.upper, int(c))
            for r, c in zip(ranges, counts)
        ]

    async def price_summary(self) -> PriceSummary | None:
        """Min / max / average price; None when the catalog is empty."""
        query = select(
            func.min(Medicine.price),
            func.max(Medicine.price),
            func.avg(Medicine.price),
        )
        async with self._reading("price_summary"):
            result = await self.db.execute(query)
            low, high, avg = result.one()
        if low is None:
            return None
        return PriceSummary(
            min_price=Decimal(str(low)),
            max_price=Decimal(str(high)),
            avg_price=Decimal(str(avg)).quantize(Decimal("0.01")),
        )

    async def top_groups(
        self, field: CatalogField, limit: int,
    ) -> list[GroupStat]:
        """Most frequent values of a field with their average price."""
        column = _COLUMNS[field]
        count = func.count(Medicine.id).label("count")
        query = (
            select(column, count, func.avg(Medicine.price))
            .where(column.is_not(None))
            .group_by(column)
            .order_by(count.desc(), column.asc())
            .limit(limit)
        )
        async with self._reading("top_groups"):
            result = await self.db.execute(query)
            rows = result.all()
        return [
            GroupStat(
                value=str(value),
                count=int(n),
                avg_price=Decimal(str(avg)).quantize(Decimal("0.01")),
            )
            for value, n, avg in rows
        ]

    @asynccontextmanager
    async def _reading(self, operation: str) -> AsyncGenerator[None, None]:
        """Map SQLAlchemy failures inside a read to CatalogUnavailableError."""
        try:
            yield
        except SQLAlchemyError as e:
            logger.error(
                f"Catalog {operation} failed: {e}",
                extra={"error_code": "CATALOG_UNAVAILABLE", "operation": operation},
            )
            raise CatalogUnavailableError(
                "Catalog read failed", operation,
                ErrorContext(operation=operation),
            ) from e
