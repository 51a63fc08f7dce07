"""Query Planner — raw string parameters in, SearchRequest out.

Invariants:
    - plan_search is pure and total: it never raises
    - Unparsable page/limit fall back to defaults; unparsable prices are ignored
    - free_text is trimmed and lower-cased; "" means no search
    - page >= 1 and 1 <= page_size <= max_page_size
    - page * max_page_size fits a signed 64-bit integer, so offsets and the
      ranked-offset budget never overflow the database driver

Design Decisions:
    - Parsers raise InvalidInputError and plan_search recovers locally, so the
      recovery is visible in one place and logged at DEBUG
    - sortBy accepts the source CSV column names as aliases of the record fields
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Mapping

from medcatalog.core.domain_types import CatalogField
from medcatalog.core.errors import InvalidInputError

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20
DEFAULT_MAX_PAGE_SIZE = 100
DEFAULT_SORT_FIELD = CatalogField.NAME

# Largest value a signed 64-bit SQL integer column or OFFSET accepts
MAX_SQL_INT = 2**63 - 1

_SORT_ALIASES: dict[str, CatalogField] = {
    "medicine_name": CatalogField.NAME,
    "genericname": CatalogField.GENERIC_NAME,
    "manufacturer_name": CatalogField.MANUFACTURER,
    "category_name": CatalogField.CATEGORY,
    "unitsize": CatalogField.UNIT_SIZE,
}


@dataclass(frozen=True)
class SearchRequest:
    """One call's worth of search intent. Lifetime = one request."""
    free_text: str = ""
    category: str | None = None
    manufacturer: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    sort_field: CatalogField = DEFAULT_SORT_FIELD
    sort_descending: bool = False
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def has_search(self) -> bool:
        return bool(self.free_text)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def plan_search(
    raw_params: Mapping[str, str | None],
    default_page_size: int = DEFAULT_PAGE_SIZE,
    max_page_size: int = DEFAULT_MAX_PAGE_SIZE,
) -> SearchRequest:
    """Build a SearchRequest from raw query parameters. Never fails."""
    page_size = min(
        _recover(raw_params, "limit", _parse_positive_int, default_page_size),
        max_page_size,
    )
    page = _recover(
        raw_params, "page", _page_parser(max_page_size), DEFAULT_PAGE,
    )
    return SearchRequest(
        free_text=normalize_text(raw_params.get("search")),
        category=_optional_text(raw_params.get("category")),
        manufacturer=_optional_text(raw_params.get("manufacturer")),
        min_price=_recover(raw_params, "minPrice", _parse_price, None),
        max_price=_recover(raw_params, "maxPrice", _parse_price, None),
        sort_field=_recover(
            raw_params, "sortBy", _parse_sort_field, DEFAULT_SORT_FIELD,
        ),
        sort_descending=(raw_params.get("sortOrder") or "").strip().lower() == "desc",
        page=page,
        page_size=page_size,
    )


def normalize_text(raw: str | None) -> str:
    """Trim and lower-case free text."""
    return (raw or "").strip().lower()


def _optional_text(raw: str | None) -> str | None:
    value = (raw or "").strip()
    return value or None


def _recover(raw_params, key, parser, default):
    """Parse raw_params[key]; missing or invalid values yield default."""
    raw = raw_params.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return parser(key, raw.strip())
    except InvalidInputError as e:
        logger.debug(
            f"Recovered invalid input for {e.param}: {e.message}",
            extra={"error_code": e.code},
        )
        return default


def _parse_positive_int(key: str, raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise InvalidInputError(f"'{raw}' is not an integer", key)
    if value < 1:
        raise InvalidInputError(f"{value} must be >= 1", key)
    return value


def _page_parser(max_page_size: int):
    """page bounded so page * max_page_size stays a valid SQL integer."""
    max_page = MAX_SQL_INT // max_page_size

    def _parse_page(key: str, raw: str) -> int:
        value = _parse_positive_int(key, raw)
        if value > max_page:
            raise InvalidInputError(f"{value} exceeds the last addressable page", key)
        return value
    return _parse_page


def _parse_price(key: str, raw: str) -> Decimal:
    try:
        value = Decimal(raw)
    except InvalidOperation:
        raise InvalidInputError(f"'{raw}' is not a number", key)
    if not value.is_finite() or value < 0:
        raise InvalidInputError(f"{raw} is not a non-negative price", key)
    return value


def _parse_sort_field(key: str, raw: str) -> CatalogField:
    lowered = raw.lower()
    if lowered in _SORT_ALIASES:
        return _SORT_ALIASES[lowered]
    try:
        return CatalogField(lowered)
    except ValueError:
        raise InvalidInputError(f"'{raw}' is not a sortable field", key)
