"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure translates core predicates; it never decides ranking
    - All database failures mapped to core/errors.py types

Design Decisions:
    - Resilient wrappers over raw sessions: callers see domain errors only
"""
