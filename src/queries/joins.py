"""Hash-join and grouping helpers.

This module implements the inner equi-join and ordered aggregation
primitives shared by the retail queries. Output order always follows
the probe side insertion order, which keeps tie-breaks stable.
"""

from __future__ import annotations

from typing import Callable, Hashable, Iterable, Iterator, TypeVar

LeftT = TypeVar("LeftT")
RightT = TypeVar("RightT")
KeyT = TypeVar("KeyT", bound=Hashable)


def build_lookup(
    rows: Iterable[RightT],
    key: Callable[[RightT], KeyT],
) -> dict[KeyT, list[RightT]]:
    """Index rows by key, keeping every row per key in input order.

    Args:
        rows: Build-side rows.
        key: Key extractor.

    Returns:
        Mapping from key to matching rows.
    """
    lookup: dict[KeyT, list[RightT]] = {}
    for row in rows:
        lookup.setdefault(key(row), []).append(row)
    return lookup


def inner_join(
    probe_rows: Iterable[LeftT],
    build_rows: Iterable[RightT],
    probe_key: Callable[[LeftT], KeyT],
    build_key: Callable[[RightT], KeyT],
) -> Iterator[tuple[LeftT, RightT]]:
    """Yield matching row pairs of an inner equi-join.

    Args:
        probe_rows: Outer rows, iterated in order.
        build_rows: Inner rows, indexed by key.
        probe_key: Key extractor for outer rows.
        build_key: Key extractor for inner rows.

    Yields:
        ``(probe_row, build_row)`` pairs; unmatched rows are dropped.
    """
    lookup = build_lookup(build_rows, build_key)
    for probe_row in probe_rows:
        for build_row in lookup.get(probe_key(probe_row), ()):
            yield probe_row, build_row


def sum_by_group(
    rows: Iterable[LeftT],
    group_key: Callable[[LeftT], KeyT],
    value: Callable[[LeftT], float],
) -> dict[KeyT, float]:
    """Sum values per group, keeping groups in first-seen order."""
    totals: dict[KeyT, float] = {}
    for row in rows:
        group = group_key(row)
        totals[group] = totals.get(group, 0) + value(row)
    return totals


def first_max_key(totals: dict[KeyT, float]) -> KeyT | None:
    """Return the key with the largest total, earliest on ties."""
    best_key: KeyT | None = None
    best_total: float | None = None
    for group, total in totals.items():
        if best_total is None or total > best_total:
            best_key, best_total = group, total
    return best_key


def first_min_key(totals: dict[KeyT, float]) -> KeyT | None:
    """Return the key with the smallest total, earliest on ties."""
    best_key: KeyT | None = None
    best_total: float | None = None
    for group, total in totals.items():
        if best_total is None or total < best_total:
            best_key, best_total = group, total
    return best_key
