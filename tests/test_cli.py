"""Tests for the command line interface."""

import pytest

import bookswap.main as cli
from bookswap.config import MarketplaceSettings
from bookswap.fixtures import FixtureStore
from bookswap.models import BookListing
from remote_fakes import FakeRemoteClient, make_services, run_async, seeded_tables


@pytest.fixture
def fake_services(monkeypatch):
    """Route the CLI's service construction to an in-memory backend."""
    client = FakeRemoteClient({})
    client.register("john.smith@example.com", "secret", user_id="user-001")

    def create(settings=None):
        return make_services(client, store=FixtureStore.seeded())

    monkeypatch.setattr(cli, "create_services", create)
    return client


def test_parser_commands():
    parser = cli.create_argument_parser()

    args = parser.parse_args(["listings", "--category", "Fiction"])
    assert args.command == "listings"
    assert args.category == "Fiction"
    assert args.search is None

    args = parser.parse_args(["-v", "schema", "messaging"])
    assert args.verbose
    assert args.group == "messaging"


@pytest.mark.parametrize("argv", [
    [],
    ["schema", "reviews"],
    ["listings", "--search", "x", "--seller", "user-001"],
    ["inbox", "--email", "a@b.c"],
])
def test_parser_rejects_bad_arguments(argv):
    with pytest.raises(SystemExit):
        cli.create_argument_parser().parse_args(argv)


def test_schema_prints_group_sql(capsys):
    assert cli.main(["schema", "messaging"]) == 0

    out = capsys.readouterr().out
    assert "-- messaging" in out
    assert "public.conversations" in out
    assert "public.messages" in out
    assert "CREATE TABLE IF NOT EXISTS public.book_listings" not in out


def test_schema_prints_every_group(capsys):
    assert cli.run_schema(None) == 0

    out = capsys.readouterr().out
    for group in ("users", "listings", "saved_items", "messaging"):
        assert f"-- {group}" in out


def test_format_listing():
    listing = BookListing.model_validate(seeded_tables("book_listings")["book_listings"][0])

    text = cli.format_listing(listing)

    assert text.startswith("📚 The Great Gatsby by F. Scott Fitzgerald")
    assert "Price: $12.99" in text
    assert "Seller: user-001" in text


def test_listings_command_serves_fixtures(fake_services, capsys):
    assert cli.main(["listings", "--search", "gatsby"]) == 0

    out = capsys.readouterr().out
    assert "Found 1 listing(s)" in out
    assert "The Great Gatsby" in out


def test_listings_command_empty(fake_services, capsys):
    assert run_async(cli.run_listings(MarketplaceSettings(), seller="user-404")) == 0

    assert "No listings found." in capsys.readouterr().out


def test_inbox_command(fake_services, capsys):
    assert cli.main(["inbox", "--email", "john.smith@example.com", "--password", "secret"]) == 0

    out = capsys.readouterr().out
    assert "John Smith <john.smith@example.com>: 1 unread message(s)" in out
    assert "Emily Wong about 'The Great Gatsby' (1 unread)" in out
    assert fake_services.closed


def test_inbox_bad_password_exits_with_error(fake_services, capsys):
    assert cli.main(["inbox", "--email", "john.smith@example.com", "--password", "nope"]) == 1

    assert "Error:" in capsys.readouterr().err
