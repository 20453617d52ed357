"""Shared typed models.

This module defines the immutable record types stored in tables and
the entity contract every stored record type must satisfy.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Protocol, runtime_checkable


@runtime_checkable
class Entity(Protocol):
    """Structural contract for records kept in a table.

    Record types are dataclasses whose fields are JSON scalars.
    """

    @property
    def id(self) -> int:
        """Stable record identifier."""
        ...


RECORD_FIELD_TYPES: tuple[type, ...] = (int, float, str, bool)


@dataclass(frozen=True)
class Buyer:
    """Customer who places sales.

    Attributes:
        id: Buyer identifier.
        name: Display name.
    """

    id: int
    name: str


@dataclass(frozen=True)
class Shop:
    """Physical shop location.

    Attributes:
        id: Shop identifier.
        city: City the shop is located in.
        country: Country the shop is located in.
    """

    id: int
    city: str
    country: str


@dataclass(frozen=True)
class Good:
    """Sellable good.

    Attributes:
        id: Good identifier.
        category: Category name used for grouping.
        price: Unit price.
    """

    id: int
    category: str
    price: float


@dataclass(frozen=True)
class Sale:
    """One sale row linking a buyer, a shop, and a good.

    Attributes:
        id: Sale identifier.
        buyer_id: Referenced buyer id.
        shop_id: Referenced shop id.
        good_id: Referenced good id.
        good_count: Number of units sold.
    """

    id: int
    buyer_id: int
    shop_id: int
    good_id: int
    good_count: int


RETAIL_RECORD_TYPES: Mapping[str, type] = {
    record_type.__name__: record_type for record_type in (Buyer, Shop, Good, Sale)
}
