"""
Message service - Buyer/seller conversations about a listing.

A conversation is identified by its (listing, buyer, seller) triple; starting
a conversation that already exists appends to it. Conversations and messages
share one fallback flag: if either table is missing, both are served from
fixtures.
"""

import asyncio
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from bookswap.error_handling import (
    ForbiddenError,
    InvalidInputError,
    MarketplaceError,
    NotFoundError,
)
from bookswap.models import (
    BookListing,
    Conversation,
    ConversationParticipant,
    ConversationWithDetails,
    ListingSummary,
    Message,
    User,
)
from bookswap.remote.client import Filter, Order
from bookswap.remote.schema import TableGroup
from bookswap.services.fallback import FallbackService, ServiceContext
from bookswap.services.listings import ListingService
from bookswap.services.users import UserService
from bookswap.time_utils import utc_now

logger = logging.getLogger(__name__)

CONVERSATIONS_TABLE = "conversations"
MESSAGES_TABLE = "messages"

# (conversation, unread count for the caller, last message content)
ConversationSummary = Tuple[Conversation, int, Optional[str]]


class MessageService(FallbackService):
    """Inbox, chat history and sending"""

    group = TableGroup.MESSAGING

    def __init__(self, ctx: ServiceContext, users: UserService, listings: ListingService):
        super().__init__(ctx)
        self.users = users
        self.listings = listings

    @staticmethod
    def _validate_content(content: str) -> str:
        if content is None or not content.strip():
            raise InvalidInputError("Message content cannot be empty")
        return content

    @staticmethod
    def _check_participant(conversation: Conversation, user_id: str) -> None:
        if not conversation.has_participant(user_id):
            raise ForbiddenError(f"User is not part of conversation {conversation.id}")

    # Remote helpers

    async def _remote_conversation(self, conversation_id: str) -> Conversation:
        rows = await self.client.query(
            CONVERSATIONS_TABLE, filters=[Filter.eq("id", conversation_id)], limit=1
        )
        if not rows:
            raise NotFoundError(f"Conversation not found: {conversation_id}")
        return Conversation.model_validate(rows[0])

    async def _remote_append(self, conversation: Conversation, sender_id: str, content: str) -> Message:
        """Insert a message and advance the conversation's last_message_at."""
        row = await self.client.insert(MESSAGES_TABLE, {
            "conversation_id": conversation.id,
            "sender_id": sender_id,
            "receiver_id": conversation.other_participant(sender_id),
            "content": content,
            "created_at": utc_now().isoformat(),
            "read": False,
        })
        message = Message.model_validate(row)
        await self.client.update(
            CONVERSATIONS_TABLE,
            [Filter.eq("id", conversation.id)],
            {"last_message_at": message.created_at.isoformat()},
        )
        return message

    async def _remote_summary(self, conversation: Conversation, user_id: str) -> ConversationSummary:
        unread, last_rows = await asyncio.gather(
            self.client.count(MESSAGES_TABLE, [
                Filter.eq("conversation_id", conversation.id),
                Filter.eq("receiver_id", user_id),
                Filter.eq("read", False),
            ]),
            self.client.query(
                MESSAGES_TABLE,
                filters=[Filter.eq("conversation_id", conversation.id)],
                order=Order("created_at", descending=True),
                limit=1,
                columns="content",
            ),
        )
        return conversation, unread, last_rows[0]["content"] if last_rows else None

    # Fixture helpers

    def _fixture_conversation(self, conversation_id: str) -> Conversation:
        conversation = self.store.get_conversation(conversation_id)
        if conversation is None:
            raise NotFoundError(f"Conversation not found: {conversation_id}")
        return conversation

    def _fixture_append(self, conversation: Conversation, sender_id: str, content: str) -> Message:
        message = Message(
            id=self.store.next_id("msg"),
            conversation_id=conversation.id,
            sender_id=sender_id,
            receiver_id=conversation.other_participant(sender_id),
            content=content,
            created_at=utc_now(),
            read=False,
        )
        return self.store.add_message(message)

    def _fixture_summary(self, conversation: Conversation, user_id: str) -> ConversationSummary:
        last = self.store.last_message(conversation.id)
        return (
            conversation,
            self.store.unread_count(conversation.id, user_id),
            last.content if last else None,
        )

    # Enrichment

    async def _lookup_users(self, user_ids: List[str]) -> Dict[str, User]:
        try:
            return await self.users.get_users_by_ids(user_ids)
        except MarketplaceError as e:
            self.ctx.error_handler.log_error("get_conversations.users", e, user_ids=user_ids)
            return {}

    async def _lookup_listings(self, listing_ids: List[str]) -> Dict[str, BookListing]:
        try:
            listings = await self.listings.get_listings_by_ids(listing_ids)
        except MarketplaceError as e:
            self.ctx.error_handler.log_error("get_conversations.listings", e, listing_ids=listing_ids)
            return {}
        return {l.id: l for l in listings}

    async def _enrich(
        self,
        user_id: str,
        summaries: Sequence[ConversationSummary]
    ) -> List[ConversationWithDetails]:
        """Attach the counterpart and listing to each conversation."""
        if not summaries:
            return []
        users, listings = await asyncio.gather(
            self._lookup_users([c.other_participant(user_id) for c, _, _ in summaries]),
            self._lookup_listings([c.listing_id for c, _, _ in summaries]),
        )

        details = []
        for conversation, unread, last_message in summaries:
            other_id = conversation.other_participant(user_id)
            other = users.get(other_id)
            listing = listings.get(conversation.listing_id)
            details.append(ConversationWithDetails(
                **conversation.model_dump(),
                unread_count=unread,
                last_message=last_message,
                other_user=ConversationParticipant(
                    id=other_id,
                    name=other.name,
                    profile_image=other.profile_image,
                ) if other else ConversationParticipant(id=other_id),
                listing=ListingSummary(
                    id=listing.id,
                    title=listing.title,
                    image_url=listing.image_url,
                    price=listing.price,
                ) if listing else ListingSummary(id=conversation.listing_id),
            ))
        return details

    # Operations

    async def get_conversations(self) -> List[ConversationWithDetails]:
        """
        Active conversations of the signed-in user, most recent first.

        Each entry carries the caller's unread count, the last message, the
        other participant and the listing. A counterpart or listing that
        cannot be loaded is shown as a placeholder.
        """
        user_id = await self.ctx.require_user_id("view conversations")

        async def remote() -> List[ConversationSummary]:
            rows = await self.client.query(
                CONVERSATIONS_TABLE,
                filters=[Filter.eq("is_active", True)],
                any_of=[Filter.eq("buyer_id", user_id), Filter.eq("seller_id", user_id)],
                order=Order("last_message_at", descending=True),
            )
            conversations = [Conversation.model_validate(row) for row in rows]
            return list(await asyncio.gather(
                *(self._remote_summary(c, user_id) for c in conversations)
            ))

        async def fixture() -> List[ConversationSummary]:
            return [self._fixture_summary(c, user_id) for c in self.store.conversations_for(user_id)]

        summaries = await self._dispatch("get_conversations", remote, fixture)
        details = await self._enrich(user_id, summaries)
        details.sort(key=lambda d: d.last_message_at, reverse=True)
        return details

    async def get_messages(self, conversation_id: str) -> List[Message]:
        """Messages of a conversation, oldest first."""

        async def remote() -> List[Message]:
            rows = await self.client.query(
                MESSAGES_TABLE,
                filters=[Filter.eq("conversation_id", conversation_id)],
                order=Order("created_at"),
            )
            return [Message.model_validate(row) for row in rows]

        async def fixture() -> List[Message]:
            return self.store.messages_for(conversation_id)

        return await self._dispatch("get_messages", remote, fixture)

    async def send_message(self, conversation_id: str, content: str) -> Message:
        """
        Send a message to the other participant of a conversation.

        Raises:
            InvalidInputError: Empty content
            NotAuthenticatedError: Caller is signed out
            NotFoundError: Conversation does not exist
            ForbiddenError: Caller is not a participant
        """
        content = self._validate_content(content)
        user_id = await self.ctx.require_user_id("send messages")

        async def remote() -> Message:
            conversation = await self._remote_conversation(conversation_id)
            self._check_participant(conversation, user_id)
            return await self._remote_append(conversation, user_id, content)

        async def fixture() -> Message:
            conversation = self._fixture_conversation(conversation_id)
            self._check_participant(conversation, user_id)
            return self._fixture_append(conversation, user_id, content)

        return await self._dispatch("send_message", remote, fixture)

    async def mark_messages_as_read(self, conversation_id: str) -> None:
        """Mark every message the caller received in a conversation as read."""
        user_id = await self.ctx.require_user_id("mark messages as read")

        async def remote() -> None:
            await self.client.update(
                MESSAGES_TABLE,
                [
                    Filter.eq("conversation_id", conversation_id),
                    Filter.eq("receiver_id", user_id),
                    Filter.eq("read", False),
                ],
                {"read": True},
            )

        async def fixture() -> None:
            self.store.mark_read(conversation_id, user_id)

        await self._dispatch("mark_messages_as_read", remote, fixture)

    async def start_conversation(
        self,
        listing_id: str,
        seller_id: str,
        initial_message: str
    ) -> Conversation:
        """
        Contact a seller about a listing.

        An active conversation for the same (listing, buyer, seller) gets the
        message appended instead of a second conversation being created.

        Returns:
            The conversation, with last_message_at at the new message
        """
        content = self._validate_content(initial_message)
        user_id = await self.ctx.require_user_id("start a conversation")
        if user_id == seller_id:
            raise InvalidInputError("Cannot start a conversation with yourself")

        async def remote() -> Conversation:
            rows = await self.client.query(
                CONVERSATIONS_TABLE,
                filters=[
                    Filter.eq("listing_id", listing_id),
                    Filter.eq("buyer_id", user_id),
                    Filter.eq("seller_id", seller_id),
                    Filter.eq("is_active", True),
                ],
                limit=1,
            )
            if rows:
                conversation = Conversation.model_validate(rows[0])
            else:
                # A missing messages table must surface before the conversation row is written
                await self.client.query(MESSAGES_TABLE, columns="id", limit=1)
                now = utc_now().isoformat()
                created = await self.client.insert(CONVERSATIONS_TABLE, {
                    "listing_id": listing_id,
                    "buyer_id": user_id,
                    "seller_id": seller_id,
                    "created_at": now,
                    "last_message_at": now,
                    "is_active": True,
                })
                conversation = Conversation.model_validate(created)
                logger.info(f"Started conversation {conversation.id} about {listing_id}")
            message = await self._remote_append(conversation, user_id, content)
            return conversation.model_copy(update={"last_message_at": message.created_at})

        async def fixture() -> Conversation:
            conversation = self.store.find_conversation(listing_id, user_id, seller_id)
            if conversation is None:
                now = utc_now()
                conversation = self.store.add_conversation(Conversation(
                    id=self.store.next_id("conv"),
                    listing_id=listing_id,
                    buyer_id=user_id,
                    seller_id=seller_id,
                    created_at=now,
                    last_message_at=now,
                    is_active=True,
                ))
                logger.info(f"Started conversation {conversation.id} about {listing_id}")
            self._fixture_append(conversation, user_id, content)
            return self.store.get_conversation(conversation.id)

        return await self._dispatch("start_conversation", remote, fixture)

    async def get_unread_count(self) -> int:
        """Unread messages across all conversations; 0 when signed out."""
        user_id = await self.ctx.current_user_id()
        if not user_id:
            return 0

        async def remote() -> int:
            return await self.client.count(MESSAGES_TABLE, [
                Filter.eq("receiver_id", user_id),
                Filter.eq("read", False),
            ])

        async def fixture() -> int:
            return self.store.total_unread(user_id)

        return await self._dispatch("get_unread_count", remote, fixture)
