"""Data models for the BookSwap services"""

from .user import (
    DEFAULT_RATING,
    AuthIdentity,
    AuthSession,
    User,
    UserCredentials,
    UserProfileUpdate,
    UserRegistration,
)
from .listing import (
    BookCondition,
    BookFilterOptions,
    BookListing,
    BookListingUpdate,
    CreateBookListing,
)
from .saved_item import SavedItem, SavedItemType
from .conversation import (
    UNKNOWN_BOOK_TITLE,
    UNKNOWN_USER_NAME,
    Conversation,
    ConversationParticipant,
    ConversationWithDetails,
    ListingSummary,
    Message,
)

__all__ = [
    "DEFAULT_RATING",
    "AuthIdentity",
    "AuthSession",
    "User",
    "UserCredentials",
    "UserProfileUpdate",
    "UserRegistration",
    "BookCondition",
    "BookFilterOptions",
    "BookListing",
    "BookListingUpdate",
    "CreateBookListing",
    "SavedItem",
    "SavedItemType",
    "Conversation",
    "ConversationParticipant",
    "ConversationWithDetails",
    "ListingSummary",
    "Message",
    "UNKNOWN_BOOK_TITLE",
    "UNKNOWN_USER_NAME",
]
