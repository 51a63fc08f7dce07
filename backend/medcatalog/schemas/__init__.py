"""Pydantic Schemas — response validation for API endpoints.

Invariants:
    - Schemas describe the wire format; core value types never reach the wire directly

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
