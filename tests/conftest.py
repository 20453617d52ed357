"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def retail_store():
    """Return a store with all four retail tables created and empty."""
    from core.types import Buyer, Good, Sale, Shop
    from store.table_store import TableStore

    store = TableStore()
    for record_type in (Buyer, Shop, Good, Sale):
        store.create_table(record_type)
    return store
