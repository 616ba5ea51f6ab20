# tests/test_queries.py
import pytest

from app import queries
from app.database import ProductStore
from app.errors import ValidationError


@pytest.fixture
def snapshot():
    return ProductStore(seed=True).list()


def test_category_filter_is_case_insensitive(snapshot):
    page = queries.filter_and_paginate(snapshot, category="Electronics")
    assert page.total == 3
    assert {p.category for p in page.data} == {"electronics"}


def test_in_stock_filter(snapshot):
    assert queries.filter_and_paginate(snapshot, in_stock="TRUE").total == 4
    out = queries.filter_and_paginate(snapshot, in_stock="false")
    assert [p.name for p in out.data] == ["Coffee Maker"]


def test_max_price_filter_and_bad_value_skipped(snapshot):
    assert queries.filter_and_paginate(snapshot, max_price="200").total == 3
    assert queries.filter_and_paginate(snapshot, max_price="cheap").total == 5


def test_filters_are_conjunctive(snapshot):
    page = queries.filter_and_paginate(snapshot, category="electronics", in_stock="true", max_price="800")
    assert [p.id for p in page.data] == ["2", "5"]


def test_second_page_of_two(snapshot):
    page = queries.filter_and_paginate(snapshot, page="2", limit="2")
    assert len(page.data) == 2
    assert [p.id for p in page.data] == ["3", "4"]
    assert page.total == 5
    assert page.total_pages == 3


def test_page_past_the_end_is_empty(snapshot):
    page = queries.filter_and_paginate(snapshot, page="9", limit="2")
    assert page.data == []
    assert page.total == 5


@pytest.mark.parametrize("raw", [None, "abc", "0", "-2"])
def test_bad_page_and_limit_fall_back_to_defaults(snapshot, raw):
    page = queries.filter_and_paginate(snapshot, page=raw, limit=raw)
    assert (page.page, page.limit) == (1, 10)
    assert len(page.data) == 5
    assert page.total_pages == 1


def test_empty_snapshot_has_zero_pages():
    page = queries.filter_and_paginate([])
    assert page.total == 0
    assert page.total_pages == 0


def test_search_requires_query(snapshot):
    with pytest.raises(ValidationError) as exc:
        queries.search(snapshot, "")
    assert exc.value.details == ['Search query parameter "q" is required']
    with pytest.raises(ValidationError):
        queries.search(snapshot, None)


def test_search_matches_name_or_description(snapshot):
    result = queries.search(snapshot, "phone")
    assert [p.name for p in result.results] == ["Smartphone", "Wireless Headphones"]
    assert result.count == 2

    by_description = queries.search(snapshot, "ERGONOMIC")
    assert [p.id for p in by_description.results] == ["4"]


def test_stats_over_sample(snapshot):
    s = queries.stats(snapshot)
    assert s.total_products == 5
    assert s.in_stock == 4
    assert s.out_of_stock == 1
    assert s.categories == {"electronics": 3, "kitchen": 1, "furniture": 1}
    assert s.price_stats.min == 50
    assert s.price_stats.max == 1200
    assert s.price_stats.average == pytest.approx(480)


def test_stats_on_empty_snapshot():
    s = queries.stats([])
    assert s.total_products == 0
    assert s.categories == {}
    assert s.price_stats.min is None
    assert s.price_stats.max is None
    assert s.price_stats.average is None
