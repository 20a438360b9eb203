"""Saved item data models"""

from pydantic import BaseModel
from enum import Enum
from datetime import datetime


class SavedItemType(str, Enum):
    FAVORITE = "favorite"
    WISHLIST = "wishlist"


class SavedItem(BaseModel):
    """A user's favorite or wishlist entry for one listing"""
    id: str
    user_id: str
    book_id: str
    type: SavedItemType
    created_at: datetime
