"""
Property-based tests for saved items.

These tests verify idempotent membership, toggle behaviour under overlapping
calls, anonymous degradation and the join against listings.
"""

import asyncio
import gc

import pytest
from hypothesis import given, settings, strategies as st

from bookswap.error_handling import NotAuthenticatedError
from bookswap.models import SavedItemType
from remote_fakes import FakeRemoteClient, make_services, run_async, seeded_tables


book_ids = st.sampled_from(["book-001", "book-002", "book-003"])
item_types = st.sampled_from(list(SavedItemType))
saved_operations = st.lists(
    st.tuples(st.sampled_from(["add", "remove", "toggle"]), book_ids, item_types),
    max_size=12,
)


def _services(use_fixtures, user_id="user-009"):
    tables = {} if use_fixtures else seeded_tables("book_listings", "saved_items")
    client = FakeRemoteClient(tables)
    client.login_as(user_id)
    return make_services(client)


@pytest.mark.parametrize("use_fixtures", [False, True])
def test_toggle_flips_membership(use_fixtures):
    services = _services(use_fixtures)

    async def scenario():
        first = await services.saved_items.toggle_saved_item("book-001", SavedItemType.WISHLIST)
        second = await services.saved_items.toggle_saved_item("book-001", SavedItemType.WISHLIST)
        return first, second

    assert run_async(scenario()) == (True, False)


@given(operations=saved_operations, use_fixtures=st.booleans())
@settings(max_examples=100)
def test_membership_follows_set_semantics(operations, use_fixtures):
    """
    For any sequence of add/remove/toggle calls, membership equals the set
    model: add inserts, remove discards, toggle flips; repeats are no-ops.
    """
    services = _services(use_fixtures)
    model = set()

    async def scenario():
        for op, book_id, item_type in operations:
            key = (book_id, item_type)
            if op == "add":
                await services.saved_items.add_saved_item(book_id, item_type)
                model.add(key)
            elif op == "remove":
                await services.saved_items.remove_saved_item(book_id, item_type)
                model.discard(key)
            else:
                now_saved = await services.saved_items.toggle_saved_item(book_id, item_type)
                assert now_saved == (key not in model)
                model.symmetric_difference_update({key})

        observed = set()
        for book_id in ("book-001", "book-002", "book-003"):
            for item_type in SavedItemType:
                if await services.saved_items.is_saved_item(book_id, item_type):
                    observed.add((book_id, item_type))
        return observed

    assert run_async(scenario()) == model
    if not use_fixtures:
        assert len(services.ctx.client.tables["saved_items"]) == len(model)


def test_adding_twice_stores_one_row():
    services = _services(use_fixtures=False)

    async def scenario():
        await services.saved_items.add_saved_item("book-002", SavedItemType.FAVORITE)
        await services.saved_items.add_saved_item("book-002", SavedItemType.FAVORITE)

    run_async(scenario())

    assert len(services.ctx.client.tables["saved_items"]) == 1


@pytest.mark.parametrize("use_fixtures", [False, True])
def test_overlapping_toggles_flip_twice(use_fixtures):
    """Two overlapping toggles on one key leave it unsaved, never duplicated."""
    services = _services(use_fixtures)

    async def scenario():
        results = await asyncio.gather(
            services.saved_items.toggle_saved_item("book-003", SavedItemType.FAVORITE),
            services.saved_items.toggle_saved_item("book-003", SavedItemType.FAVORITE),
        )
        return results, await services.saved_items.is_saved_item("book-003", SavedItemType.FAVORITE)

    results, still_saved = run_async(scenario())

    assert sorted(results) == [False, True]
    assert still_saved is False
    if not use_fixtures:
        assert services.ctx.client.tables["saved_items"] == []


def test_toggle_locks_released_after_use():
    services = _services(use_fixtures=False)

    async def scenario():
        await services.saved_items.toggle_saved_item("book-001", SavedItemType.WISHLIST)
        await asyncio.gather(
            services.saved_items.toggle_saved_item("book-002", SavedItemType.FAVORITE),
            services.saved_items.toggle_saved_item("book-002", SavedItemType.FAVORITE),
            services.saved_items.toggle_saved_item("book-003", SavedItemType.FAVORITE),
        )

    run_async(scenario())
    gc.collect()

    assert len(services.saved_items._toggle_locks) == 0


@pytest.mark.parametrize("use_fixtures", [False, True])
def test_anonymous_reads_degrade(use_fixtures):
    tables = {} if use_fixtures else seeded_tables("book_listings", "saved_items")
    client = FakeRemoteClient(tables)
    services = make_services(client)

    async def scenario():
        return (
            await services.saved_items.is_saved_item("book-001", SavedItemType.FAVORITE),
            await services.saved_items.get_favorites(),
            await services.saved_items.get_wishlist(),
        )

    assert run_async(scenario()) == (False, [], [])
    assert client.calls == []


def test_anonymous_mutations_require_login():
    services = make_services(FakeRemoteClient(seeded_tables("saved_items")))

    with pytest.raises(NotAuthenticatedError):
        run_async(services.saved_items.add_saved_item("book-001", SavedItemType.FAVORITE))
    with pytest.raises(NotAuthenticatedError):
        run_async(services.saved_items.remove_saved_item("book-001", SavedItemType.FAVORITE))
    with pytest.raises(NotAuthenticatedError):
        run_async(services.saved_items.toggle_saved_item("book-001", SavedItemType.FAVORITE))


@pytest.mark.parametrize("use_fixtures", [False, True])
def test_saved_items_resolve_to_listings(use_fixtures):
    """Saved ids become listings; ids with no listing are dropped."""
    services = _services(use_fixtures)

    async def scenario():
        await services.saved_items.add_saved_item("book-004", SavedItemType.WISHLIST)
        await services.saved_items.add_saved_item("book-404", SavedItemType.WISHLIST)
        await services.saved_items.add_saved_item("book-001", SavedItemType.FAVORITE)
        return await services.saved_items.get_wishlist(), await services.saved_items.get_favorites()

    wishlist, favorites = run_async(scenario())

    assert [l.id for l in wishlist] == ["book-004"]
    assert [l.id for l in favorites] == ["book-001"]
    assert wishlist[0].title == "Gray's Anatomy for Students"


def test_saved_items_are_per_user():
    client = FakeRemoteClient(seeded_tables("book_listings", "saved_items"))
    services = make_services(client)

    async def scenario():
        client.login_as("user-001")
        await services.saved_items.add_saved_item("book-002", SavedItemType.FAVORITE)
        client.login_as("user-002")
        return await services.saved_items.get_favorites()

    assert run_async(scenario()) == []
