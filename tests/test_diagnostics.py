"""Tests for backend table diagnostics."""

import pytest

from bookswap.diagnostics import (
    GROUP_DESCRIPTIONS,
    check_required_tables,
    check_table_exists,
    missing_table_report,
)
from bookswap.error_handling import RemoteError
from bookswap.remote import REQUIRED_TABLES, TableGroup
from remote_fakes import FakeRemoteClient, run_async, seeded_tables


def test_all_tables_present():
    results = run_async(check_required_tables(FakeRemoteClient(seeded_tables())))

    assert list(results) == list(REQUIRED_TABLES)
    assert all(results.values())
    assert missing_table_report(results) == []


def test_missing_tables_reported_per_group():
    tables = seeded_tables("book_listings", "user_profiles")
    results = run_async(check_required_tables(FakeRemoteClient(tables)))

    assert results == {
        "book_listings": True,
        "user_profiles": True,
        "saved_items": False,
        "conversations": False,
        "messages": False,
    }
    report = missing_table_report(results)

    assert [entry["group"] for entry in report] == ["saved_items", "messaging"]
    messaging = report[1]
    assert messaging["tables"] == ["conversations", "messages"]
    assert messaging["description"] == GROUP_DESCRIPTIONS[TableGroup.MESSAGING]
    assert messaging["command"] == "bookswap schema messaging"


def test_unknown_table_ignored_in_report():
    assert missing_table_report({"reviews": False}) == []


def test_other_failures_propagate():
    client = FakeRemoteClient(seeded_tables())
    client.failures["saved_items"] = RemoteError("permission denied", code="42501", status=403)

    assert run_async(check_table_exists(client, "book_listings")) is True
    with pytest.raises(RemoteError):
        run_async(check_table_exists(client, "saved_items"))
