"""
Fixture store - In-memory marketplace dataset served when remote tables
are missing.

Every mutation runs without awaiting, so one asyncio task never observes
another's half-applied change.
"""

import logging
import re
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from bookswap.error_handling.errors import ConflictError, NotFoundError
from bookswap.fixtures.seed_data import (
    SEED_CONVERSATIONS,
    SEED_LISTINGS,
    SEED_MESSAGES,
    SEED_USERS,
)
from bookswap.models import (
    BookListing,
    Conversation,
    Message,
    SavedItem,
    SavedItemType,
    User,
)
from bookswap.time_utils import utc_now

logger = logging.getLogger(__name__)

SavedKey = Tuple[str, str, SavedItemType]

_ID_SUFFIX = re.compile(r"^(?P<prefix>[a-z]+)-(?P<n>\d+)$")


class FixtureStore:
    """
    Seed users, listings, conversations and messages plus the saved-item
    index, all mutable for the lifetime of the store.
    """

    def __init__(
        self,
        users: Iterable[User] = (),
        listings: Iterable[BookListing] = (),
        conversations: Iterable[Conversation] = (),
        messages: Iterable[Message] = ()
    ):
        self.users: Dict[str, User] = {u.id: u for u in users}
        self.listings: Dict[str, BookListing] = {l.id: l for l in listings}
        self.conversations: Dict[str, Conversation] = {c.id: c for c in conversations}
        self.messages: List[Message] = list(messages)
        self.saved: Dict[SavedKey, SavedItem] = {}
        self._counters: Dict[str, int] = {}
        for ids in (self.users, self.listings, self.conversations, [m.id for m in self.messages]):
            for item_id in ids:
                self._bump_counter(item_id)

    @classmethod
    def seeded(
        cls,
        conversations: Optional[Sequence[Union[dict, Conversation]]] = None,
        messages: Optional[Sequence[Union[dict, Message]]] = None
    ) -> "FixtureStore":
        """
        Build a store from the seed dataset.

        Args:
            conversations: Replaces the seed conversations when given
            messages: Replaces the seed messages when given
        """
        conv_rows = SEED_CONVERSATIONS if conversations is None else conversations
        msg_rows = SEED_MESSAGES if messages is None else messages
        return cls(
            users=[User.from_profile_row(row) for row in SEED_USERS],
            listings=[BookListing.model_validate(row) for row in SEED_LISTINGS],
            conversations=[Conversation.model_validate(row) for row in conv_rows],
            messages=[Message.model_validate(row) for row in msg_rows],
        )

    def _bump_counter(self, item_id: str) -> None:
        match = _ID_SUFFIX.match(item_id)
        if match:
            prefix = match.group("prefix")
            self._counters[prefix] = max(self._counters.get(prefix, 0), int(match.group("n")))

    def next_id(self, prefix: str) -> str:
        """Next sequential id for a collection, e.g. ``msg-007``."""
        n = self._counters.get(prefix, 0) + 1
        self._counters[prefix] = n
        return f"{prefix}-{n:03d}"

    # Users

    def get_user(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    def find_user_by_email(self, email: str) -> Optional[User]:
        wanted = email.strip().lower()
        for user in self.users.values():
            if user.email.lower() == wanted:
                return user
        return None

    def add_user(self, user: User) -> User:
        existing = self.find_user_by_email(user.email)
        if existing and existing.id != user.id:
            raise ConflictError(f"Email already in use: {user.email}")
        self.users[user.id] = user
        return user

    def link_user(self, user: User) -> User:
        """Store a signed-in identity's profile under its own id."""
        self.users[user.id] = user
        return user

    def update_user(self, user_id: str, changes: Dict) -> User:
        user = self.users.get(user_id)
        if user is None:
            raise NotFoundError(f"User not found: {user_id}")
        updated = user.model_copy(update=changes)
        self.users[user_id] = updated
        return updated

    # Listings

    def all_listings(self) -> List[BookListing]:
        """Listings newest first."""
        return sorted(self.listings.values(), key=lambda l: l.created_at, reverse=True)

    def get_listing(self, listing_id: str) -> Optional[BookListing]:
        return self.listings.get(listing_id)

    def add_listing(self, listing: BookListing) -> BookListing:
        self.listings[listing.id] = listing
        self._bump_counter(listing.id)
        return listing

    def update_listing(self, listing_id: str, changes: Dict) -> BookListing:
        listing = self.listings.get(listing_id)
        if listing is None:
            raise NotFoundError(f"Listing not found: {listing_id}")
        updated = BookListing.model_validate({**listing.model_dump(), **changes})
        self.listings[listing_id] = updated
        return updated

    def remove_listing(self, listing_id: str) -> None:
        self.listings.pop(listing_id, None)

    # Saved items

    def is_saved(self, user_id: str, book_id: str, item_type: SavedItemType) -> bool:
        return (user_id, book_id, item_type) in self.saved

    def add_saved(self, user_id: str, book_id: str, item_type: SavedItemType) -> SavedItem:
        key = (user_id, book_id, item_type)
        if key not in self.saved:
            self.saved[key] = SavedItem(
                id=self.next_id("saved"),
                user_id=user_id,
                book_id=book_id,
                type=item_type,
                created_at=utc_now(),
            )
        return self.saved[key]

    def remove_saved(self, user_id: str, book_id: str, item_type: SavedItemType) -> None:
        self.saved.pop((user_id, book_id, item_type), None)

    def toggle_saved(self, user_id: str, book_id: str, item_type: SavedItemType) -> bool:
        """Flip membership in one step; returns the new membership."""
        if self.is_saved(user_id, book_id, item_type):
            self.remove_saved(user_id, book_id, item_type)
            return False
        self.add_saved(user_id, book_id, item_type)
        return True

    def saved_book_ids(self, user_id: str, item_type: SavedItemType) -> List[str]:
        """Book ids saved by a user, most recently saved first."""
        items = [
            item for (uid, _, itype), item in self.saved.items()
            if uid == user_id and itype == item_type
        ]
        items.sort(key=lambda item: item.created_at, reverse=True)
        return [item.book_id for item in items]

    # Conversations and messages

    def get_conversation(self, conversation_id: str) -> Optional[Conversation]:
        return self.conversations.get(conversation_id)

    def conversations_for(self, user_id: str) -> List[Conversation]:
        """Active conversations the user takes part in."""
        return [
            c for c in self.conversations.values()
            if c.is_active and c.has_participant(user_id)
        ]

    def find_conversation(
        self,
        listing_id: str,
        buyer_id: str,
        seller_id: str
    ) -> Optional[Conversation]:
        for conv in self.conversations.values():
            if (
                conv.is_active
                and conv.listing_id == listing_id
                and conv.buyer_id == buyer_id
                and conv.seller_id == seller_id
            ):
                return conv
        return None

    def add_conversation(self, conversation: Conversation) -> Conversation:
        self.conversations[conversation.id] = conversation
        self._bump_counter(conversation.id)
        return conversation

    def add_message(self, message: Message) -> Message:
        """Append a message and advance its conversation's last_message_at."""
        conv = self.conversations.get(message.conversation_id)
        if conv is None:
            raise NotFoundError(f"Conversation not found: {message.conversation_id}")
        self.messages.append(message)
        self._bump_counter(message.id)
        if message.created_at > conv.last_message_at:
            self.conversations[conv.id] = conv.model_copy(
                update={"last_message_at": message.created_at}
            )
        return message

    def messages_for(self, conversation_id: str) -> List[Message]:
        """Messages of a conversation, oldest first."""
        msgs = [m for m in self.messages if m.conversation_id == conversation_id]
        msgs.sort(key=lambda m: m.created_at)
        return msgs

    def last_message(self, conversation_id: str) -> Optional[Message]:
        msgs = self.messages_for(conversation_id)
        return msgs[-1] if msgs else None

    def unread_count(self, conversation_id: str, user_id: str) -> int:
        return sum(
            1 for m in self.messages
            if m.conversation_id == conversation_id and m.receiver_id == user_id and not m.read
        )

    def total_unread(self, user_id: str) -> int:
        return sum(1 for m in self.messages if m.receiver_id == user_id and not m.read)

    def mark_read(self, conversation_id: str, user_id: str) -> int:
        """Mark the user's unread messages in a conversation as read."""
        marked = 0
        for i, m in enumerate(self.messages):
            if m.conversation_id == conversation_id and m.receiver_id == user_id and not m.read:
                self.messages[i] = m.model_copy(update={"read": True})
                marked += 1
        if marked:
            logger.debug(f"Marked {marked} messages read in {conversation_id}")
        return marked
