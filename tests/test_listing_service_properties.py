"""
Property-based tests for the listing service.

These tests verify search and filter semantics on the fixture path, that the
remote path selects the same listings, and the seller-only mutation rules of
fixture data.
"""

import pytest
from hypothesis import given, settings, strategies as st

from bookswap.error_handling import ForbiddenError, NotAuthenticatedError, NotFoundError
from bookswap.fixtures import SEED_LISTINGS
from bookswap.models import BookCondition, BookFilterOptions, BookListingUpdate, CreateBookListing
from bookswap.remote.schema import TableGroup
from remote_fakes import FakeRemoteClient, make_services, run_async, seeded_tables


CATEGORIES = sorted({row["category"] for row in SEED_LISTINGS}) + ["Poetry"]

search_terms = st.one_of(
    st.sampled_from(["history", "HARPER", "classic", "the", "medical", "Orwell", "zzz"]),
    st.text(alphabet="abcdefghijklmnopqrstuvwxyz ABCXYZ'.:%_*\\", min_size=1, max_size=4),
)

prices = st.one_of(st.none(), st.floats(min_value=0, max_value=120, allow_nan=False))

filter_options = st.builds(
    BookFilterOptions,
    categories=st.one_of(st.none(), st.lists(st.sampled_from(CATEGORIES), max_size=3, unique=True)),
    conditions=st.one_of(st.none(), st.lists(st.sampled_from(list(BookCondition)), max_size=3, unique=True)),
    min_price=prices,
    max_price=prices,
    is_negotiable=st.one_of(st.none(), st.booleans()),
    exchange_option=st.one_of(st.none(), st.booleans()),
)


def _satisfies(listing, options):
    if options.categories and listing.category not in options.categories:
        return False
    if options.conditions and listing.condition not in options.conditions:
        return False
    if options.min_price is not None and listing.price < options.min_price:
        return False
    if options.max_price is not None and listing.price > options.max_price:
        return False
    if options.is_negotiable is not None and listing.is_negotiable != options.is_negotiable:
        return False
    if options.exchange_option is not None and listing.exchange_option != options.exchange_option:
        return False
    return True


def _fixture_services():
    return make_services(FakeRemoteClient({}), force_fixtures=True)


def _remote_services():
    return make_services(FakeRemoteClient(seeded_tables("book_listings")))


@given(term=search_terms)
@settings(max_examples=100)
def test_search_matches_any_text_field(term):
    """
    For any search term, a listing is returned exactly when its title, author
    or description contains the term, ignoring case.
    """
    services = _fixture_services()

    everything = run_async(services.listings.get_listings())
    found = run_async(services.listings.search_listings(term))

    needle = term.lower()
    expected = [
        l.id for l in everything
        if needle in l.title.lower()
        or needle in l.author.lower()
        or needle in (l.description or "").lower()
    ]
    assert [l.id for l in found] == expected


@given(term=search_terms)
@settings(max_examples=50)
def test_remote_search_selects_same_listings(term):
    fixture_ids = [l.id for l in run_async(_fixture_services().listings.search_listings(term))]
    remote = _remote_services()
    remote_ids = [l.id for l in run_async(remote.listings.search_listings(term))]

    assert remote_ids == fixture_ids
    assert not remote.ctx.fallback.is_active(TableGroup.LISTINGS)


@pytest.mark.parametrize("term", ["%", "_", "*", "50_", "a%b", "\\", "%the%"])
def test_wildcard_characters_in_search_are_literal(term):
    fixture_ids = [l.id for l in run_async(_fixture_services().listings.search_listings(term))]
    remote = _remote_services()
    remote_ids = [l.id for l in run_async(remote.listings.search_listings(term))]

    assert remote_ids == fixture_ids == []
    assert not remote.ctx.fallback.is_active(TableGroup.LISTINGS)


@given(options=filter_options)
@settings(max_examples=100)
def test_filters_combine_with_and(options):
    """
    For any filter options, every returned listing satisfies every set
    predicate and every omitted listing fails at least one.
    """
    services = _fixture_services()

    everything = run_async(services.listings.get_listings())
    found = run_async(services.listings.get_filtered_listings(options))
    found_ids = {l.id for l in found}

    for listing in everything:
        assert (listing.id in found_ids) == _satisfies(listing, options)


@given(options=filter_options)
@settings(max_examples=50)
def test_remote_filters_select_same_listings(options):
    fixture_ids = [l.id for l in run_async(_fixture_services().listings.get_filtered_listings(options))]
    remote_ids = [l.id for l in run_async(_remote_services().listings.get_filtered_listings(options))]

    assert remote_ids == fixture_ids


def test_empty_filters_return_everything():
    services = _fixture_services()

    assert len(run_async(services.listings.get_filtered_listings(BookFilterOptions()))) == 15
    assert len(run_async(services.listings.get_filtered_listings(
        BookFilterOptions(categories=[], conditions=[])
    ))) == 15


@pytest.mark.parametrize("make", [_fixture_services, _remote_services])
def test_listings_are_newest_first(make):
    listings = run_async(make().listings.get_listings())

    created = [l.created_at for l in listings]
    assert created == sorted(created, reverse=True)
    assert listings[0].id == "book-015"
    assert listings[-1].id == "book-001"


@pytest.mark.parametrize("make", [_fixture_services, _remote_services])
def test_category_and_seller_queries(make):
    services = make()

    textbooks = run_async(services.listings.get_listings_by_category("Textbook"))
    by_seller = run_async(services.listings.get_listings_by_seller("user-001"))

    assert [l.id for l in textbooks] == ["book-014", "book-009", "book-004"]
    assert [l.id for l in by_seller] == ["book-011", "book-006", "book-001"]


@pytest.mark.parametrize("make", [_fixture_services, _remote_services])
def test_get_listings_by_ids_keeps_order_and_drops_unknown(make):
    listings = run_async(make().listings.get_listings_by_ids(["book-007", "book-404", "book-002", "book-007"]))

    assert [l.id for l in listings] == ["book-007", "book-002"]


@pytest.mark.parametrize("make", [_fixture_services, _remote_services])
def test_get_listing_by_id_missing_is_none(make):
    assert run_async(make().listings.get_listing_by_id("book-404")) is None


def _new_listing(seller_id="user-003"):
    return CreateBookListing(
        title="Cosmos",
        author="Carl Sagan",
        price=18.0,
        condition=BookCondition.GOOD,
        category="Non-Fiction",
        seller_id=seller_id,
    )


def test_fixture_create_listing_assigns_id_and_time():
    services = _fixture_services()
    services.ctx.client.login_as("user-003")

    async def scenario():
        created = await services.listings.create_listing(_new_listing())
        return created, await services.listings.get_listings()

    created, listings = run_async(scenario())

    assert created.id == "book-016"
    assert created.seller_id == "user-003"
    assert not created.is_negotiable
    assert listings[0].id == "book-016"


def test_remote_create_listing_inserts_row():
    services = _remote_services()

    created = run_async(services.listings.create_listing(_new_listing()))

    rows = services.ctx.client.tables["book_listings"]
    assert len(rows) == 16
    assert rows[-1]["id"] == created.id
    assert rows[-1]["condition"] == "Good"


def test_fixture_create_listing_requires_the_seller():
    services = _fixture_services()

    with pytest.raises(NotAuthenticatedError):
        run_async(services.listings.create_listing(_new_listing()))

    services.ctx.client.login_as("user-001")
    with pytest.raises(ForbiddenError):
        run_async(services.listings.create_listing(_new_listing("user-003")))


@given(
    price=st.one_of(st.none(), st.floats(min_value=0.01, max_value=500, allow_nan=False)),
    negotiable=st.one_of(st.none(), st.booleans()),
    use_fixtures=st.booleans(),
)
@settings(max_examples=50)
def test_update_listing_changes_only_given_fields(price, negotiable, use_fixtures):
    services = _fixture_services() if use_fixtures else _remote_services()
    services.ctx.client.login_as("user-002")
    given_fields = {k: v for k, v in (("price", price), ("is_negotiable", negotiable)) if v is not None}

    async def scenario():
        before = await services.listings.get_listing_by_id("book-002")
        after = await services.listings.update_listing("book-002", BookListingUpdate(**given_fields))
        return before, after

    before, after = run_async(scenario())

    assert after.price == given_fields.get("price", before.price)
    assert after.is_negotiable == given_fields.get("is_negotiable", before.is_negotiable)
    for field in ("title", "author", "condition", "description", "seller_id", "created_at"):
        assert getattr(after, field) == getattr(before, field)


def test_update_listing_unknown_id_is_not_found():
    with pytest.raises(NotFoundError):
        run_async(_remote_services().listings.update_listing("book-404", BookListingUpdate(price=5)))

    services = _fixture_services()
    services.ctx.client.login_as("user-001")
    with pytest.raises(NotFoundError):
        run_async(services.listings.update_listing("book-404", BookListingUpdate(price=5)))


def test_fixture_update_by_another_user_is_forbidden():
    services = _fixture_services()
    services.ctx.client.login_as("user-001")

    with pytest.raises(ForbiddenError):
        run_async(services.listings.update_listing("book-002", BookListingUpdate(price=1)))

    assert services.ctx.store.get_listing("book-002").price == 10.50


def test_fixture_delete_listing():
    services = _fixture_services()
    services.ctx.client.login_as("user-005")

    async def scenario():
        await services.listings.delete_listing("book-015")
        await services.listings.delete_listing("book-015")
        return await services.listings.get_listing_by_id("book-015")

    assert run_async(scenario()) is None
    assert len(services.ctx.store.listings) == 14


def test_fixture_delete_by_another_user_is_forbidden():
    services = _fixture_services()
    services.ctx.client.login_as("user-001")

    with pytest.raises(ForbiddenError):
        run_async(services.listings.delete_listing("book-015"))
    assert services.ctx.store.get_listing("book-015") is not None


def test_remote_delete_listing_removes_row():
    services = _remote_services()

    run_async(services.listings.delete_listing("book-001"))

    assert "book-001" not in {row["id"] for row in services.ctx.client.tables["book_listings"]}
