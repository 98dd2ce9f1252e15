import sys

import pytest

from app.core.exceptions.exceptions import InvalidInputError, StoreUnavailableError
from app.schemas.topics import SortOption
from app.services.topic_query_service import (
    TopicQueryService,
    normalize_limit,
    normalize_page,
    normalize_sort,
    parse_int,
)


@pytest.mark.parametrize("raw, expected", [
    (None, None), ("3", 3), (" 3 ", 3), ("3abc", 3), ("1.5", 1),
    ("-2", -2), ("abc", None), ("", None), (7, 7), (True, None), (["2"], None),
])
def test_parse_int(raw, expected):
    assert parse_int(raw) == expected


@pytest.mark.parametrize("raw, expected", [
    (None, 1), ("abc", 1), ("0", 1), ("-4", 1), ("1", 1), ("7", 7),
])
def test_normalize_page(raw, expected):
    assert normalize_page(raw) == expected


@pytest.mark.parametrize("raw, expected", [
    (None, 10), ("abc", 10), ("0", 1), ("-5", 1), ("1", 1), ("25", 25), ("50", 50), ("51", 50), ("1000", 50),
])
def test_normalize_limit(raw, expected):
    assert normalize_limit(raw) == expected


def test_normalization_is_idempotent():
    for page in (1, 2, 17):
        assert normalize_page(normalize_page(page)) == normalize_page(page)
    for limit in (1, 10, 50):
        assert normalize_limit(normalize_limit(limit)) == limit


def test_normalize_sort():
    assert normalize_sort("name") is SortOption.NAME
    assert normalize_sort(None) is SortOption.NONE
    assert normalize_sort("NAME") is SortOption.NONE
    assert normalize_sort("date") is SortOption.NONE


def test_handle_scenario(service):
    result = service.handle("go", "name", "1", "10")

    assert result == {
        "data": [{"name": "Go", "id": 1}, {"name": "Golang Basics", "id": 2}],
        "pagination": {"total": 2, "page": 1, "limit": 10, "totalPages": 1},
    }


@pytest.mark.parametrize("raw_search", [None, "", 5, ["go"]])
def test_invalid_search_touches_neither_cache_nor_store(service, cache, loader, raw_search):
    with pytest.raises(InvalidInputError):
        service.handle(raw_search)

    assert loader.calls == 0
    assert len(cache) == 0


def test_second_identical_query_is_served_from_cache(service, loader):
    first = service.handle("go", "name")
    second = service.handle("go", "name")

    assert first == second
    assert loader.calls == 1


def test_queries_that_normalize_equally_share_the_cache(service, loader):
    service.handle("go", None, "0", "0")
    service.handle("go", "bogus", "-1", "1")
    service.handle("go", None, None, "-20")

    assert loader.calls == 1


def test_cache_expiry_reloads_snapshot(service, loader, clock):
    service.handle("go")
    clock.advance(300)
    service.handle("go")

    assert loader.calls == 2


def test_cached_result_reflects_store_until_expiry(service, loader, clock):
    assert service.handle("rust")["pagination"]["total"] == 0

    loader.records = loader.records + [{"name": "Rust"}]
    assert service.handle("rust")["pagination"]["total"] == 0

    clock.advance(300)
    assert service.handle("rust")["pagination"]["total"] == 1


def test_store_error_propagates_and_is_not_cached(cache, loader):
    def broken():
        raise StoreUnavailableError("topics.json", "boom")

    service = TopicQueryService(cache=cache, load_snapshot=broken)
    with pytest.raises(StoreUnavailableError):
        service.handle("go")
    assert len(cache) == 0

    service.load_snapshot = loader
    assert service.handle("go")["pagination"]["total"] == 2


def test_unexpected_loader_error_becomes_store_unavailable(cache):
    def broken():
        raise ValueError("bad data")

    service = TopicQueryService(cache=cache, load_snapshot=broken)
    with pytest.raises(StoreUnavailableError) as exc_info:
        service.handle("go")

    assert isinstance(exc_info.value.__cause__, ValueError)


def test_custom_limits(cache, loader):
    service = TopicQueryService(cache=cache, load_snapshot=loader, default_limit=2, max_limit=3)

    assert service.handle("o")["pagination"]["limit"] == 2
    assert service.handle("o", None, None, "99")["pagination"]["limit"] == 3


def test_parse_int_saturates_very_long_numbers():
    assert parse_int("9" * 5000) == sys.maxsize
    assert parse_int("-" + "9" * 5000) == -sys.maxsize
    assert parse_int("0" * 5000 + "7") == 7


def test_very_long_page_and_limit_are_coerced(service):
    result = service.handle("o", None, "9" * 5000, "9" * 5000)

    assert result["data"] == []
    assert result["pagination"]["limit"] == 50
    assert result["pagination"]["page"] == sys.maxsize
    assert result["pagination"]["total"] == 3

    result = service.handle("o", None, "-" + "9" * 5000, "-" + "9" * 5000)
    assert result["pagination"]["page"] == 1
    assert result["pagination"]["limit"] == 1
