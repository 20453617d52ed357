"""Retail aggregate queries over the table store.

Every query is a pure read: it fetches the tables it needs from the
store, joins them with inner equi-join semantics, and returns a derived
value. Missing tables surface as ``TableNotFoundError`` from the store.
Ties are always resolved in favour of the earliest row or group.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping

from core.constants import DEFAULT_TOP_BUYERS_LIMIT
from core.errors import QueryError
from core.types import Buyer, Good, Sale, Shop
from queries.joins import (
    build_lookup,
    first_max_key,
    first_min_key,
    inner_join,
    sum_by_group,
)
from store.table_store import TableStore


def longest_name_buyer_goods(store: TableStore) -> list[Good]:
    """Return goods bought by the buyer with the longest name.

    Goods are filtered by membership in that buyer's sold good ids, so
    each good row appears once regardless of how many sales reference it.

    Args:
        store: Table store holding Buyer, Sale, and Good tables.

    Returns:
        Matching goods in Good table order; empty without buyers.
    """
    buyers = store.get_table(Buyer)
    sales = store.get_table(Sale)
    goods = store.get_table(Good)
    if not buyers:
        return []
    longest_buyer = buyers[0]
    for buyer in buyers[1:]:
        if len(buyer.name) > len(longest_buyer.name):
            longest_buyer = buyer
    good_ids = {sale.good_id for sale in sales if sale.buyer_id == longest_buyer.id}
    return [good for good in goods if good.id in good_ids]


def most_expensive_good_category(store: TableStore) -> str | None:
    """Return the category with the highest total sales value.

    Args:
        store: Table store holding Sale and Good tables.

    Returns:
        Category name, or None when no sale matches a good.
    """
    joined = inner_join(
        store.get_table(Sale),
        store.get_table(Good),
        lambda sale: sale.good_id,
        lambda good: good.id,
    )
    totals = sum_by_group(
        joined,
        lambda pair: pair[1].category,
        lambda pair: pair[1].price * pair[0].good_count,
    )
    return first_max_key(totals)


def minimum_sales_city(store: TableStore) -> str | None:
    """Return the city with the fewest goods sold.

    Args:
        store: Table store holding Sale and Shop tables.

    Returns:
        City name, or None when no sale matches a shop.
    """
    joined = inner_join(
        store.get_table(Sale),
        store.get_table(Shop),
        lambda sale: sale.shop_id,
        lambda shop: shop.id,
    )
    totals = sum_by_group(
        joined,
        lambda pair: pair[1].city,
        lambda pair: pair[0].good_count,
    )
    return first_min_key(totals)


def top_popular_buyers(store: TableStore, limit: int = DEFAULT_TOP_BUYERS_LIMIT) -> list[Buyer]:
    """Return the buyers with the most goods bought, best first.

    Totals are aggregated from the Sale table, so buyers without sales
    never rank. The top ``limit`` buyer ids are picked before joining to
    the Buyer table; ids missing from it are dropped.

    Args:
        store: Table store holding Sale and Buyer tables.
        limit: Maximum number of ranked buyer ids.

    Returns:
        Buyers ordered by descending total goods count.
    """
    sales = store.get_table(Sale)
    buyers = store.get_table(Buyer)
    totals = sum_by_group(sales, lambda sale: sale.buyer_id, lambda sale: sale.good_count)
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)[:limit]
    buyers_by_id = build_lookup(buyers, lambda buyer: buyer.id)
    return [buyer for buyer_id, _ in ranked for buyer in buyers_by_id.get(buyer_id, ())]


def minimum_shops_per_country(store: TableStore) -> int:
    """Return the smallest number of shops located in one country.

    Args:
        store: Table store holding the Shop table.

    Returns:
        Minimum shop count per country, or 0 without shops.
    """
    counts: dict[str, int] = {}
    for shop in store.get_table(Shop):
        counts[shop.country] = counts.get(shop.country, 0) + 1
    return min(counts.values(), default=0)


def cross_city_filtered_sales(store: TableStore) -> list[Sale]:
    """Return sales joined to a shop that pass the cross-city check.

    The check compares ``sale.buyer_id`` with ``shop.id``. Buyers carry
    no city, so a true buyer-city versus shop-city comparison is not
    possible with this schema; the id comparison is kept as-is.

    Args:
        store: Table store holding Shop and Sale tables.

    Returns:
        Matching sales in Sale table order.
    """
    joined = inner_join(
        store.get_table(Sale),
        store.get_table(Shop),
        lambda sale: sale.shop_id,
        lambda shop: shop.id,
    )
    return [sale for sale, shop in joined if sale.buyer_id != shop.id]


def total_sales_value(store: TableStore) -> float:
    """Return the summed value of all sales that match a good.

    Args:
        store: Table store holding Sale and Good tables.

    Returns:
        Sum of ``good_count * price``, or 0 without sales.
    """
    joined = inner_join(
        store.get_table(Sale),
        store.get_table(Good),
        lambda sale: sale.good_id,
        lambda good: good.id,
    )
    return sum((sale.good_count * good.price for sale, good in joined), 0)


QUERY_REGISTRY: Mapping[str, Callable[..., Any]] = {
    "longest-name-buyer-goods": longest_name_buyer_goods,
    "most-expensive-good-category": most_expensive_good_category,
    "minimum-sales-city": minimum_sales_city,
    "top-popular-buyers": top_popular_buyers,
    "minimum-shops-per-country": minimum_shops_per_country,
    "cross-city-filtered-sales": cross_city_filtered_sales,
    "total-sales-value": total_sales_value,
}


def supported_queries() -> tuple[str, ...]:
    """Return supported query names in registry order."""
    return tuple(QUERY_REGISTRY)


def run_named_query(
    store: TableStore,
    query_name: str,
    top_buyers_limit: int = DEFAULT_TOP_BUYERS_LIMIT,
) -> Any:
    """Run one query by its registry name.

    Args:
        store: Table store to query.
        query_name: Name from ``supported_queries``.
        top_buyers_limit: Limit forwarded to the top-buyers query.

    Returns:
        The query result.

    Raises:
        QueryError: If the query name is unknown.
    """
    query = QUERY_REGISTRY.get(query_name)
    if query is None:
        supported_rows = ", ".join(QUERY_REGISTRY)
        raise QueryError(f"Unsupported query '{query_name}'. Use one of: {supported_rows}.")
    if query is top_popular_buyers:
        return top_popular_buyers(store, limit=top_buyers_limit)
    return query(store)
