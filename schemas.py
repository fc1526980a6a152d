"""
Database Schemas for the Safari & Village Experiences marketplace

Each Pydantic model maps to a MongoDB collection (lowercased class name).
- Tourist -> "tourist"
- Provider -> "provider"
- Admin -> "admin"
- Booking -> "booking"
- ContactMessage -> "contactmessage"

Field names follow the camelCase used by the web client.
"""

from enum import Enum
from typing import List, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, EmailStr, Field


class Role(str, Enum):
    TOURIST = "tourist"
    PROVIDER = "provider"
    ADMIN = "admin"


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class Tourist(BaseModel):
    fullName: str
    email: EmailStr
    password: str = Field(..., description="BCrypt hash of the password")
    country: str


class Provider(BaseModel):
    serviceName: str
    fullName: str
    email: EmailStr
    contact: str
    category: str
    location: str
    price: float = Field(..., gt=0, description="Per-person rate")
    description: str
    password: str = Field(..., description="BCrypt hash of the password")
    approved: bool = Field(False, description="Visible and bookable once approved by an admin")
    profilePicture: Optional[str] = Field(None, description="Web path under /Uploads")
    photos: List[str] = Field(default_factory=list, description="Web paths under /Uploads")


class Admin(BaseModel):
    username: str
    password: str = Field(..., description="BCrypt hash of the password")


class Booking(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, use_enum_values=True)

    touristId: ObjectId
    providerId: Optional[ObjectId] = None
    productType: Optional[str] = None
    date: str = Field(..., description="ISO date of the experience")
    time: str
    adults: int = Field(..., ge=0)
    children: int = Field(0, ge=0)
    status: BookingStatus = BookingStatus.PENDING
    totalPrice: float = Field(..., ge=0)
    specialNotes: Optional[str] = None


class ContactMessage(BaseModel):
    name: str
    email: EmailStr
    message: str
    phone: Optional[str] = None
