"""Public SDK surface for retail-tables.

This module provides a stable import path for library users.
It re-exports the store, the client, the record types, and the queries.
"""

from __future__ import annotations

from core.config import RetailConfig
from core.errors import (
    QueryError,
    RetailTablesError,
    SessionSpecError,
    TableFormatError,
    TableIOError,
    TableNotFoundError,
    TableSchemaError,
)
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
from store.table_sdk import RetailClient
from store.table_store import TableStore

__all__ = [
    "Buyer",
    "Good",
    "QueryError",
    "RetailClient",
    "RetailConfig",
    "RetailTablesError",
    "Sale",
    "SessionSpecError",
    "Shop",
    "TableFormatError",
    "TableIOError",
    "TableNotFoundError",
    "TableSchemaError",
    "TableStore",
    "cross_city_filtered_sales",
    "longest_name_buyer_goods",
    "minimum_sales_city",
    "minimum_shops_per_country",
    "most_expensive_good_category",
    "run_named_query",
    "supported_queries",
    "top_popular_buyers",
    "total_sales_value",
]
