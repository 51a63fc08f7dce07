"""ORM Models — SQLAlchemy declarative models for the catalog.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - All models imported here so Base.metadata is complete for create_all and alembic
"""

from medcatalog.models.medicine import Medicine  # noqa: F401
