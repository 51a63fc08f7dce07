"""Initial schema — medicines catalog table and search indexes.

Revision ID: 001_medicines
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_medicines"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "medicines",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("generic_name", sa.String(500), nullable=False),
        sa.Column("manufacturer", sa.String(255), nullable=False),
        sa.Column("category", sa.String(255), nullable=False),
        sa.Column("strength", sa.String(255), nullable=True),
        sa.Column("unit", sa.String(100), nullable=False),
        sa.Column("unit_size", sa.Integer, nullable=False, server_default="1"),
        sa.Column("price", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("unit_size > 0", name="ck_medicines_unit_size_positive"),
        sa.CheckConstraint("price >= 0", name="ck_medicines_price_non_negative"),
    )
    op.create_index("ix_medicines_slug", "medicines", ["slug"], unique=True)
    op.create_index("ix_medicines_name", "medicines", ["name"])
    op.create_index("ix_medicines_generic_name", "medicines", ["generic_name"])
    op.create_index("ix_medicines_manufacturer", "medicines", ["manufacturer"])
    op.create_index("ix_medicines_category", "medicines", ["category"])
    op.create_index("ix_medicines_price", "medicines", ["price"])


def downgrade() -> None:
    op.drop_table("medicines")
