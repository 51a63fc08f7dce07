"""Service Layer — async orchestration of catalog reads around the pure core.

Invariants:
    - Services depend on CatalogReader, never on SQLAlchemy directly
    - Catalog reads within one call are sequential

Design Decisions:
    - Impure shell around the functional core: core decides, services read
"""
