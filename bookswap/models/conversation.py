"""Conversation and message data models"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


UNKNOWN_USER_NAME = "Unknown User"
UNKNOWN_BOOK_TITLE = "Unknown Book"


class Conversation(BaseModel):
    """
    Buyer/seller thread about one listing.

    Identity key is the (listing_id, buyer_id, seller_id) triple.
    """
    id: str
    listing_id: str
    buyer_id: str
    seller_id: str
    created_at: datetime
    last_message_at: datetime
    is_active: bool = True

    class Config:
        from_attributes = True

    def other_participant(self, user_id: str) -> str:
        return self.seller_id if user_id == self.buyer_id else self.buyer_id

    def has_participant(self, user_id: str) -> bool:
        return user_id in (self.buyer_id, self.seller_id)


class Message(BaseModel):
    """Single message in a conversation"""
    id: str
    conversation_id: str
    sender_id: str
    receiver_id: str
    content: str
    created_at: datetime
    read: bool = False

    class Config:
        from_attributes = True


class ConversationParticipant(BaseModel):
    id: str
    name: str = UNKNOWN_USER_NAME
    profile_image: Optional[str] = Field(default=None, alias="profileImage")

    class Config:
        populate_by_name = True


class ListingSummary(BaseModel):
    id: str
    title: str = UNKNOWN_BOOK_TITLE
    image_url: Optional[str] = None
    price: float = 0


class ConversationWithDetails(Conversation):
    """Conversation enriched for the inbox view"""
    unread_count: int = Field(default=0, alias="unreadCount")
    last_message: Optional[str] = Field(default=None, alias="lastMessage")
    other_user: ConversationParticipant = Field(alias="otherUser")
    listing: ListingSummary

    class Config:
        from_attributes = True
        populate_by_name = True
