"""Tests for the in-memory fixture dataset."""

from datetime import timedelta

import pytest

from bookswap.error_handling import ConflictError, NotFoundError
from bookswap.fixtures import SEED_LISTINGS, FixtureStore
from bookswap.models import BookCondition, Message, SavedItemType, User
from bookswap.time_utils import utc_now


def test_seed_dataset():
    store = FixtureStore.seeded()

    assert len(store.users) == 5
    assert len(store.listings) == 15
    assert set(store.conversations) == {"conv-001", "conv-002"}
    assert len(store.messages) == 6
    assert store.saved == {}


def test_seed_conditions_are_valid():
    store = FixtureStore.seeded()

    assert {l.condition for l in store.listings.values()} <= set(BookCondition)
    assert store.get_listing("book-003").condition == BookCondition.GOOD
    assert {row["id"] for row in SEED_LISTINGS} == set(store.listings)


def test_next_id_continues_each_collection():
    store = FixtureStore.seeded()

    assert store.next_id("book") == "book-016"
    assert store.next_id("book") == "book-017"
    assert store.next_id("msg") == "msg-007"
    assert store.next_id("saved") == "saved-001"


def test_stores_are_independent():
    first = FixtureStore.seeded()
    second = FixtureStore.seeded()

    first.remove_listing("book-001")
    first.mark_read("conv-001", "user-001")

    assert second.get_listing("book-001") is not None
    assert second.total_unread("user-001") == 1


def test_find_user_by_email_ignores_case():
    store = FixtureStore.seeded()

    assert store.find_user_by_email(" JOHN.SMITH@example.com ").id == "user-001"
    assert store.find_user_by_email("nobody@example.com") is None


def test_add_user_rejects_taken_email():
    store = FixtureStore.seeded()
    clash = User(id="auth-1", email="emily.wong@example.com", name="Other Emily", join_date=utc_now())

    with pytest.raises(ConflictError):
        store.add_user(clash)


def test_link_user_keeps_seed_profile_with_same_email():
    store = FixtureStore.seeded()
    linked = store.get_user("user-002").model_copy(update={"id": "auth-1"})

    store.link_user(linked)

    assert store.get_user("auth-1").name == "Emily Wong"
    assert store.get_user("user-002") is not None
    assert store.update_user("auth-1", {"bio": "hi"}).bio == "hi"


def test_update_unknown_records():
    store = FixtureStore.seeded()

    with pytest.raises(NotFoundError):
        store.update_user("user-404", {"bio": "x"})
    with pytest.raises(NotFoundError):
        store.update_listing("book-404", {"price": 1})


def test_update_listing_revalidates():
    store = FixtureStore.seeded()

    updated = store.update_listing("book-001", {"condition": "Fair", "price": 9.5})

    assert updated.condition == BookCondition.FAIR
    assert updated.price == 9.5
    assert store.get_listing("book-001") == updated


def test_saved_book_ids_most_recent_first():
    store = FixtureStore.seeded()

    store.add_saved("user-001", "book-002", SavedItemType.FAVORITE)
    store.add_saved("user-001", "book-007", SavedItemType.FAVORITE)
    store.saved[("user-001", "book-002", SavedItemType.FAVORITE)] = store.saved[
        ("user-001", "book-002", SavedItemType.FAVORITE)
    ].model_copy(update={"created_at": utc_now() + timedelta(minutes=1)})
    store.add_saved("user-001", "book-009", SavedItemType.WISHLIST)

    assert store.saved_book_ids("user-001", SavedItemType.FAVORITE) == ["book-002", "book-007"]
    assert store.saved_book_ids("user-001", SavedItemType.WISHLIST) == ["book-009"]
    assert store.saved_book_ids("user-002", SavedItemType.FAVORITE) == []


def test_add_message_to_unknown_conversation():
    store = FixtureStore.seeded()
    message = Message(
        id="msg-100",
        conversation_id="conv-404",
        sender_id="user-001",
        receiver_id="user-002",
        content="hello",
        created_at=utc_now(),
    )

    with pytest.raises(NotFoundError):
        store.add_message(message)
    assert len(store.messages) == 6


def test_older_message_keeps_last_message_at():
    store = FixtureStore.seeded()
    before = store.get_conversation("conv-001").last_message_at

    store.add_message(Message(
        id="msg-100",
        conversation_id="conv-001",
        sender_id="user-001",
        receiver_id="user-002",
        content="late delivery",
        created_at=before - timedelta(days=1),
    ))

    assert store.get_conversation("conv-001").last_message_at == before
    assert store.last_message("conv-001").content == "Great! Would you consider a lower price?"


def test_mark_read_counts_changes():
    store = FixtureStore.seeded()

    assert store.mark_read("conv-002", "user-005") == 1
    assert store.mark_read("conv-002", "user-005") == 0
    assert store.unread_count("conv-001", "user-001") == 1
