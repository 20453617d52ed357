"""Unit tests for CLI command handling."""

from __future__ import annotations

import json

import pytest

from cli.main import main
from tests.fixture_paths import session_fixture


def _write_table(directory, table: str, rows: list[dict[str, object]]) -> None:
    (directory / f"{table}.json").write_text(json.dumps(rows, indent=2), encoding="utf-8")


def test_cli_run_session_prints_output_lines(tmp_path, capsys) -> None:
    """CLI run-session should print each session output line."""
    args = [
        "--data-root",
        str(tmp_path),
        "run-session",
        session_fixture("valid_session.yaml"),
    ]

    exit_code = main(args)
    output = capsys.readouterr().out.strip().splitlines()

    assert exit_code == 0 and output[-1] == "total-sales-value=5"


def test_cli_query_reads_saved_tables(tmp_path, capsys) -> None:
    """CLI query should load table files and print the result."""
    _write_table(
        tmp_path,
        "Shop",
        [
            {"id": 1, "city": "x", "country": "A"},
            {"id": 2, "city": "y", "country": "A"},
            {"id": 3, "city": "z", "country": "B"},
        ],
    )

    exit_code = main(["--data-root", str(tmp_path), "query", "minimum-shops-per-country"])
    output = capsys.readouterr().out.strip()

    assert exit_code == 0 and output == "minimum-shops-per-country=1"


def test_cli_query_prints_records_as_json_lines(tmp_path, capsys) -> None:
    """Record-valued query results render one JSON object per line."""
    _write_table(tmp_path, "Buyer", [{"id": 1, "name": "Al"}, {"id": 2, "name": "Alexandra"}])
    _write_table(tmp_path, "Good", [{"id": 10, "category": "X", "price": 5}])
    _write_table(
        tmp_path,
        "Sale",
        [{"id": 1, "buyer_id": 2, "shop_id": 1, "good_id": 10, "good_count": 1}],
    )

    exit_code = main(["--data-root", str(tmp_path), "query", "longest-name-buyer-goods"])
    output = capsys.readouterr().out.strip().splitlines()

    assert exit_code == 0
    assert [json.loads(line) for line in output] == [{"id": 10, "category": "X", "price": 5}]


def test_cli_tables_lists_row_counts(tmp_path, capsys) -> None:
    """CLI tables should show counts for files and dashes for missing ones."""
    _write_table(tmp_path, "Buyer", [{"id": 1, "name": "Al"}])

    exit_code = main(["--data-root", str(tmp_path), "tables"])
    rows = [line.split("\t") for line in capsys.readouterr().out.strip().splitlines()]

    assert exit_code == 0
    assert [(row[0], row[1]) for row in rows] == [
        ("Buyer", "1"),
        ("Shop", "-"),
        ("Good", "-"),
        ("Sale", "-"),
    ]


def test_cli_query_rejects_unknown_name(tmp_path) -> None:
    """Argparse should reject query names outside the registry."""
    with pytest.raises(SystemExit):
        main(["--data-root", str(tmp_path), "query", "cheapest-city"])
    assert True
