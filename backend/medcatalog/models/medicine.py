"""Medicine ORM — persists one catalog record.

Invariants:
    - id is an autoincrement integer: stable, unique, and follows insertion order
    - slug is unique (from the source dataset)
    - strength is the only optional text column
    - unit_size > 0 and price >= 0 (check constraints)

Design Decisions:
    - Numeric(12, 2) for price: decimal in, decimal out, no float drift in range filters
    - Index on each searchable text column plus price, for the browse filters and sorts
    - to_record() is the only way rows reach the core (frozen MedicineRecord)
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint, DateTime, Integer, Numeric, String,
)
from sqlalchemy.orm import Mapped, mapped_column

from medcatalog.core.domain_types import MedicineId
from medcatalog.core.records import MedicineRecord
from medcatalog.db.base import Base


class Medicine(Base):
    """Medicine catalog entry."""
    __tablename__ = "medicines"
    __table_args__ = (
        CheckConstraint("unit_size > 0", name="ck_medicines_unit_size_positive"),
        CheckConstraint("price >= 0", name="ck_medicines_price_non_negative"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    slug: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    name: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True,
    )
    generic_name: Mapped[str] = mapped_column(
        String(500), nullable=False, index=True,
    )
    manufacturer: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True,
    )
    category: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True,
    )
    strength: Mapped[str | None] = mapped_column(String(255), nullable=True)
    unit: Mapped[str] = mapped_column(String(100), nullable=False)
    unit_size: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    price: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0"), index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def to_record(self) -> MedicineRecord:
        return MedicineRecord(
            id=MedicineId(self.id),
            name=self.name,
            generic_name=self.generic_name,
            manufacturer=self.manufacturer,
            category=self.category,
            unit=self.unit,
            unit_size=self.unit_size,
            price=Decimal(self.price),
            strength=self.strength,
            slug=self.slug,
        )
