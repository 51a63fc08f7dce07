"""Domain Types and Errors — enum values and the REST error envelope.

Tests:
    - Enums serialize to their string values
    - MedicineId wraps int
    - Error classes carry the right status, category and retryability
"""

from medcatalog.core.domain_types import (
    CatalogField, MatchKind, MedicineId, PagingPolicy, SearchPath,
)
from medcatalog.core.errors import (
    CatalogUnavailableError, ErrorCategory, ErrorContext,
    InvalidInputError, SearchCancelledError,
)


def test_medicine_id_wraps_int():
    assert MedicineId(7) == 7


def test_match_kinds_strongest_first():
    assert [k.value for k in MatchKind] == [
        "exact", "prefix", "word_boundary", "contains",
    ]


def test_enums_are_strings():
    assert CatalogField.GENERIC_NAME == "generic_name"
    assert PagingPolicy("ranked_offset") is PagingPolicy.RANKED_OFFSET
    assert SearchPath.PLAIN.value == "plain"


def test_catalog_unavailable_is_retryable_503():
    err = CatalogUnavailableError("connection reset", operation="find")
    body = err.to_response()["error"]
    assert err.http_status == 503
    assert body["code"] == "CATALOG_UNAVAILABLE"
    assert body["category"] == ErrorCategory.DATABASE.value
    assert body["retryable"] is True
    assert body["context"]["operation"] == "find"
    assert "connection reset" in body["message"]


def test_search_cancelled_is_not_retryable_504():
    err = SearchCancelledError(2.5, ErrorContext(search_text="napa"))
    body = err.to_response()["error"]
    assert err.http_status == 504
    assert body["retryable"] is False
    assert body["category"] == "timeout"
    assert body["context"]["operation"] == "search"
    assert "2.5s" in body["message"]


def test_invalid_input_keeps_param_name():
    err = InvalidInputError("not a number", param="page")
    assert err.param == "page"
    assert err.http_status == 400
