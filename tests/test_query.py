# tests/test_query.py
import pytest

from app.database import ProductStore
from app.models import ProductIn
from app.query import category_stats, coerce_positive_int, filter_products, list_products


@pytest.fixture
def snapshot():
    store = ProductStore.seeded()
    store.insert(ProductIn(name="Mega Widget", description="d", price=5, category="GADGETS", in_stock=True))
    return store.list()


def test_category_filter_is_case_insensitive(snapshot):
    names = [p.name for p in filter_products(snapshot, category="Gadgets")]
    assert names == ["Widget A", "Widget B", "Mega Widget"]


def test_search_matches_name_substring(snapshot):
    names = [p.name for p in filter_products(snapshot, search="WIDGET")]
    assert names == ["Widget A", "Widget B", "Mega Widget"]
    assert filter_products(snapshot, search="gizmo")[0].name == "Gizmo C"


def test_filters_combine_and_are_idempotent(snapshot):
    once = filter_products(snapshot, category="gadgets", search="mega")
    twice = filter_products(once, category="gadgets", search="mega")
    assert [p.id for p in once] == [p.id for p in twice]
    assert [p.name for p in once] == ["Mega Widget"]


def test_empty_filters_keep_everything(snapshot):
    assert len(filter_products(snapshot, category="", search="")) == len(snapshot)


def test_defaults_page_one_limit_ten(snapshot):
    page = list_products(snapshot)
    assert (page["page"], page["limit"], page["total"]) == (1, 10, 4)
    assert len(page["data"]) == 4
    assert page["data"][0]["inStock"] is True


def test_pagination_reports_filtered_total(snapshot):
    page = list_products(snapshot, category="gadgets", page="2", limit="2")
    assert (page["page"], page["limit"], page["total"]) == (2, 2, 3)
    assert [p["name"] for p in page["data"]] == ["Mega Widget"]


def test_page_past_the_end_is_empty(snapshot):
    page = list_products(snapshot, page=50, limit=3)
    assert page["data"] == []
    assert page["total"] == 4


@pytest.mark.parametrize("raw, expected", [
    (None, 7), ("3", 3), (" 4", 4), ("2abc", 2), ("abc", 7), ("", 7), ("0", 7), ("-2", 7), (5, 5),
])
def test_coerce_positive_int(raw, expected):
    assert coerce_positive_int(raw, 7) == expected


def test_invalid_paging_falls_back_to_defaults(snapshot):
    page = list_products(snapshot, page="first", limit="lots")
    assert (page["page"], page["limit"]) == (1, 10)


def test_stats_counts_per_category():
    stats = category_stats(ProductStore.seeded().list())
    assert stats == {"total": 3, "byCategory": {"gadgets": 2, "electronics": 1}}
    assert category_stats([]) == {"total": 0, "byCategory": {}}
