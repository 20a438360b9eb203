"""User and auth data models"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Any, Dict, Optional

from bookswap.time_utils import utc_now


DEFAULT_RATING = 5.0


class AuthIdentity(BaseModel):
    """Identity held by the backend auth service"""
    id: str
    email: str


class AuthSession(BaseModel):
    """Signed-in session"""
    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[datetime] = None
    user: AuthIdentity


class UserCredentials(BaseModel):
    email: str
    password: str


class UserRegistration(UserCredentials):
    name: str = Field(min_length=1)


class User(BaseModel):
    """Marketplace user profile"""
    id: str
    email: str
    name: str
    profile_image: Optional[str] = Field(default=None, alias="profileImage")
    join_date: datetime = Field(alias="joinDate")
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    bio: Optional[str] = None
    location: Optional[str] = None
    phone: Optional[str] = None

    class Config:
        from_attributes = True
        populate_by_name = True

    @classmethod
    def from_profile_row(cls, row: Dict[str, Any], email: Optional[str] = None) -> "User":
        """Build a user from a ``user_profiles`` row."""
        return cls(
            id=row["id"],
            email=email or row.get("email") or "",
            name=row.get("name") or "",
            profile_image=row.get("profile_image"),
            join_date=row.get("join_date") or row.get("created_at") or utc_now(),
            rating=row.get("rating"),
            bio=row.get("bio"),
            location=row.get("location"),
            phone=row.get("phone"),
        )

    @classmethod
    def synthesize(cls, identity: AuthIdentity, name: Optional[str] = None) -> "User":
        """Build a profile from the auth identity alone."""
        return cls(
            id=identity.id,
            email=identity.email,
            name=name or identity.email.split("@")[0],
            join_date=utc_now(),
            rating=DEFAULT_RATING,
        )

    def to_profile_row(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "profile_image": self.profile_image,
            "join_date": self.join_date.isoformat(),
            "rating": self.rating,
            "bio": self.bio,
            "location": self.location,
            "phone": self.phone,
        }


class UserProfileUpdate(BaseModel):
    """Partial profile update; fields left unset are not touched"""
    name: Optional[str] = None
    profile_image: Optional[str] = Field(default=None, alias="profileImage")
    bio: Optional[str] = None
    location: Optional[str] = None
    phone: Optional[str] = None

    class Config:
        populate_by_name = True

    def changes(self) -> Dict[str, Any]:
        """Fields explicitly set by the caller, keyed by profile column."""
        return self.model_dump(exclude_unset=True)
