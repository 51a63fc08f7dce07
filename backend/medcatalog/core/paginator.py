"""Paginator — page-count metadata from a total and a page size.

Invariants:
    - Pure function of two integers; no IO, no side effects
    - pages == ceil(total_matches / page_size), 0 when total_matches is 0
    - pages is never negative
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PageInfo:
    page: int
    pages: int
    total_matches: int
    page_size: int

    @property
    def has_next(self) -> bool:
        return self.page < self.pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1 and self.pages > 0


def paginate(total_matches: int, page: int, page_size: int) -> PageInfo:
    """Compute page metadata. Negative totals are treated as zero."""
    total = max(total_matches, 0)
    pages = -(-total // page_size) if total else 0
    return PageInfo(
        page=page, pages=pages, total_matches=total, page_size=page_size,
    )
