"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - Catalog fields are named by CatalogField, never by raw column strings
    - Match strictness is one of four MatchKind values, strongest first
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

MedicineId = NewType("MedicineId", int)


# ─── Enums ───────────────────────────────────────────────────────

class CatalogField(str, Enum):
    """Record fields the core may match, filter or sort on."""
    NAME = "name"
    GENERIC_NAME = "generic_name"
    MANUFACTURER = "manufacturer"
    CATEGORY = "category"
    STRENGTH = "strength"
    UNIT = "unit"
    UNIT_SIZE = "unit_size"
    PRICE = "price"


class MatchKind(str, Enum):
    """Case-insensitive match strictness, strongest to weakest."""
    EXACT = "exact"
    PREFIX = "prefix"
    WORD_BOUNDARY = "word_boundary"
    CONTAINS = "contains"


class PagingPolicy(str, Enum):
    """How the search path treats the requested page.

    BEST_MATCHES ignores the page offset: every page shows the same
    top-ranked slice. RANKED_OFFSET paginates within the ranked results.
    """
    BEST_MATCHES = "best_matches"
    RANKED_OFFSET = "ranked_offset"


class SearchPath(str, Enum):
    """Which executor produced a result page."""
    SEARCH = "search"
    PLAIN = "plain"
