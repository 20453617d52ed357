"""Unit tests for retail aggregate queries."""

from __future__ import annotations

import pytest

from core.errors import QueryError, TableNotFoundError
from core.types import Buyer, Good, Sale, Shop
from queries.retail_queries import (
    cross_city_filtered_sales,
    longest_name_buyer_goods,
    minimum_sales_city,
    minimum_shops_per_country,
    most_expensive_good_category,
    run_named_query,
    supported_queries,
    top_popular_buyers,
    total_sales_value,
)
from store.table_store import TableStore


def _insert_all(store: TableStore, records: list[object]) -> None:
    for record in records:
        store.insert(type(record), lambda record=record: record)


def _snapshot(store: TableStore) -> tuple[tuple[object, ...], ...]:
    return tuple(store.get_table(record_type) for record_type in (Buyer, Shop, Good, Sale))


def _sale(sale_id: int, buyer_id: int, shop_id: int, good_id: int, good_count: int) -> Sale:
    return Sale(
        id=sale_id,
        buyer_id=buyer_id,
        shop_id=shop_id,
        good_id=good_id,
        good_count=good_count,
    )


def test_longest_name_buyer_goods_scenario(retail_store) -> None:
    """Longest-named buyer's goods should be returned from sales."""
    _insert_all(
        retail_store,
        [
            Buyer(id=1, name="Al"),
            Buyer(id=2, name="Alexandra"),
            Good(id=10, category="X", price=5),
            _sale(1, buyer_id=2, shop_id=1, good_id=10, good_count=1),
        ],
    )

    goods = longest_name_buyer_goods(retail_store)

    assert [good.id for good in goods] == [10]
    assert total_sales_value(retail_store) == 5


def test_longest_name_buyer_goods_dedupes_and_breaks_ties_first(retail_store) -> None:
    """Ties pick the first buyer; repeated goods appear once."""
    _insert_all(
        retail_store,
        [
            Buyer(id=1, name="Anna"),
            Buyer(id=2, name="Bert"),
            Good(id=10, category="X", price=5),
            Good(id=11, category="Y", price=1),
            _sale(1, buyer_id=1, shop_id=1, good_id=11, good_count=1),
            _sale(2, buyer_id=1, shop_id=1, good_id=11, good_count=2),
            _sale(3, buyer_id=2, shop_id=1, good_id=10, good_count=1),
        ],
    )

    goods = longest_name_buyer_goods(retail_store)

    assert goods == [Good(id=11, category="Y", price=1)]


def test_longest_name_buyer_goods_without_buyers_is_empty(retail_store) -> None:
    """An empty buyer table yields no goods."""
    assert longest_name_buyer_goods(retail_store) == []


def test_most_expensive_good_category_sums_price_times_count(retail_store) -> None:
    """Category totals should weight price by sold count."""
    _insert_all(
        retail_store,
        [
            Good(id=1, category="cheap", price=1),
            Good(id=2, category="pricey", price=100),
            _sale(1, buyer_id=1, shop_id=1, good_id=1, good_count=500),
            _sale(2, buyer_id=1, shop_id=1, good_id=2, good_count=2),
            _sale(3, buyer_id=1, shop_id=1, good_id=99, good_count=1000),
        ],
    )

    assert most_expensive_good_category(retail_store) == "cheap"


def test_most_expensive_good_category_tie_prefers_first_group(retail_store) -> None:
    """Equal totals should resolve to the first category seen in sales."""
    _insert_all(
        retail_store,
        [
            Good(id=1, category="A", price=2),
            Good(id=2, category="B", price=4),
            _sale(1, buyer_id=1, shop_id=1, good_id=2, good_count=1),
            _sale(2, buyer_id=1, shop_id=1, good_id=1, good_count=2),
        ],
    )

    assert most_expensive_good_category(retail_store) == "B"


def test_category_and_city_queries_return_none_without_join_rows(retail_store) -> None:
    """Empty joins should give an absent result instead of an error."""
    _insert_all(
        retail_store,
        [
            Good(id=1, category="A", price=2),
            Shop(id=1, city="Oslo", country="NO"),
            _sale(1, buyer_id=1, shop_id=7, good_id=7, good_count=1),
        ],
    )

    assert most_expensive_good_category(retail_store) is None
    assert minimum_sales_city(retail_store) is None


def test_minimum_sales_city_sums_counts_per_city(retail_store) -> None:
    """City with the lowest goods count should win, first on ties."""
    _insert_all(
        retail_store,
        [
            Shop(id=1, city="Oslo", country="NO"),
            Shop(id=2, city="Rome", country="IT"),
            Shop(id=3, city="Oslo", country="NO"),
            Shop(id=4, city="Lima", country="PE"),
            _sale(1, buyer_id=1, shop_id=1, good_id=1, good_count=1),
            _sale(2, buyer_id=1, shop_id=2, good_id=1, good_count=3),
            _sale(3, buyer_id=1, shop_id=3, good_id=1, good_count=1),
            _sale(4, buyer_id=1, shop_id=4, good_id=1, good_count=2),
        ],
    )

    assert minimum_sales_city(retail_store) == "Oslo"


def test_top_popular_buyers_orders_by_total_desc(retail_store) -> None:
    """Buyer with the larger goods total ranks first."""
    _insert_all(
        retail_store,
        [
            Buyer(id=1, name="Al"),
            Buyer(id=2, name="Bo"),
            Buyer(id=3, name="Cy"),
            _sale(1, buyer_id=1, shop_id=1, good_id=1, good_count=3),
            _sale(2, buyer_id=1, shop_id=1, good_id=1, good_count=2),
            _sale(3, buyer_id=2, shop_id=1, good_id=1, good_count=10),
        ],
    )

    buyers = top_popular_buyers(retail_store)

    assert [buyer.id for buyer in buyers] == [2, 1]


def test_top_popular_buyers_limits_and_keeps_group_order_on_ties(retail_store) -> None:
    """Only the limit is returned and ties keep first-seen order."""
    buyers = [Buyer(id=index, name=f"b{index}") for index in range(1, 13)]
    sales = [
        _sale(index, buyer_id=buyer_id, shop_id=1, good_id=1, good_count=1)
        for index, buyer_id in enumerate([12, 11, 10, 9, 8, 7, 6, 5, 4, 3, 2, 1], 1)
    ]
    _insert_all(retail_store, [*buyers, *sales])

    ranked = top_popular_buyers(retail_store)

    assert [buyer.id for buyer in ranked] == [12, 11, 10, 9, 8, 7, 6, 5, 4, 3]


def test_top_popular_buyers_skips_unknown_buyer_ids(retail_store) -> None:
    """Ranked ids without a buyer row are dropped by the join."""
    _insert_all(
        retail_store,
        [
            Buyer(id=1, name="Al"),
            _sale(1, buyer_id=99, shop_id=1, good_id=1, good_count=50),
            _sale(2, buyer_id=1, shop_id=1, good_id=1, good_count=1),
        ],
    )

    assert top_popular_buyers(retail_store) == [Buyer(id=1, name="Al")]


def test_minimum_shops_per_country_scenario(retail_store) -> None:
    """Country with a single shop gives the minimum of one."""
    _insert_all(
        retail_store,
        [
            Shop(id=1, city="x", country="A"),
            Shop(id=2, city="y", country="A"),
            Shop(id=3, city="z", country="B"),
        ],
    )

    assert minimum_shops_per_country(retail_store) == 1


def test_minimum_shops_per_country_empty_is_zero(retail_store) -> None:
    """No shops should give zero rather than an error."""
    assert minimum_shops_per_country(retail_store) == 0


def test_cross_city_filtered_sales_compares_buyer_id_to_shop_id(retail_store) -> None:
    """Sales are kept when the buyer id differs from the joined shop id."""
    kept = _sale(1, buyer_id=1, shop_id=2, good_id=1, good_count=1)
    dropped = _sale(2, buyer_id=2, shop_id=2, good_id=1, good_count=1)
    orphan = _sale(3, buyer_id=1, shop_id=9, good_id=1, good_count=1)
    _insert_all(
        retail_store,
        [Shop(id=2, city="Oslo", country="NO"), kept, dropped, orphan],
    )

    assert cross_city_filtered_sales(retail_store) == [kept]


def test_total_sales_value_empty_is_zero(retail_store) -> None:
    """No sales should give a zero total."""
    assert total_sales_value(retail_store) == 0


def test_total_sales_value_ignores_sales_without_good(retail_store) -> None:
    """Sales referencing unknown goods do not contribute."""
    _insert_all(
        retail_store,
        [
            Good(id=1, category="A", price=2.5),
            _sale(1, buyer_id=1, shop_id=1, good_id=1, good_count=4),
            _sale(2, buyer_id=1, shop_id=1, good_id=2, good_count=4),
        ],
    )

    assert total_sales_value(retail_store) == 10.0


def test_queries_raise_when_required_table_missing() -> None:
    """Missing tables propagate table-not-found from the store."""
    store = TableStore()
    store.create_table(Shop)

    with pytest.raises(TableNotFoundError):
        total_sales_value(store)

    assert minimum_shops_per_country(store) == 0


def test_queries_do_not_mutate_tables(retail_store) -> None:
    """Running every query should leave tables untouched."""
    _insert_all(
        retail_store,
        [
            Buyer(id=1, name="Al"),
            Shop(id=1, city="Oslo", country="NO"),
            Good(id=1, category="A", price=3),
            _sale(1, buyer_id=1, shop_id=1, good_id=1, good_count=2),
        ],
    )
    before = _snapshot(retail_store)

    for query_name in supported_queries():
        run_named_query(retail_store, query_name)

    assert _snapshot(retail_store) == before


def test_run_named_query_unknown_name_raises(retail_store) -> None:
    """Unknown query names are rejected."""
    with pytest.raises(QueryError):
        run_named_query(retail_store, "cheapest-city")

    assert "total-sales-value" in supported_queries()
