"""Book listing data models"""

from pydantic import BaseModel, Field
from enum import Enum
from datetime import datetime
from typing import Any, Dict, List, Optional


class BookCondition(str, Enum):
    """Allowed listing conditions"""
    NEW = "New"
    LIKE_NEW = "Like New"
    GOOD = "Good"
    FAIR = "Fair"
    ACCEPTABLE = "Acceptable"


class BookListingBase(BaseModel):
    """Base listing fields"""
    title: str
    author: str
    price: float = Field(gt=0)
    condition: BookCondition
    description: Optional[str] = None
    image_url: Optional[str] = None
    category: Optional[str] = None
    edition: Optional[str] = None
    isbn: Optional[str] = None
    publisher: Optional[str] = None
    publication_year: Optional[int] = None
    is_negotiable: bool = False
    exchange_option: bool = False


class CreateBookListing(BookListingBase):
    """Model for creating a new listing"""
    seller_id: str


class BookListing(CreateBookListing):
    """Complete listing model"""
    id: str
    created_at: datetime

    class Config:
        from_attributes = True


class BookListingUpdate(BaseModel):
    """Partial listing update; fields left unset are not touched"""
    title: Optional[str] = None
    author: Optional[str] = None
    price: Optional[float] = Field(default=None, gt=0)
    condition: Optional[BookCondition] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    category: Optional[str] = None
    edition: Optional[str] = None
    isbn: Optional[str] = None
    publisher: Optional[str] = None
    publication_year: Optional[int] = None
    is_negotiable: Optional[bool] = None
    exchange_option: Optional[bool] = None

    def changes(self) -> Dict[str, Any]:
        """Fields explicitly set by the caller, JSON-ready."""
        return self.model_dump(mode="json", exclude_unset=True)


class BookFilterOptions(BaseModel):
    """
    Independently optional listing predicates, combined with AND.

    An omitted (None) or empty predicate imposes no constraint.
    """
    categories: Optional[List[str]] = None
    conditions: Optional[List[BookCondition]] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    is_negotiable: Optional[bool] = None
    exchange_option: Optional[bool] = None
