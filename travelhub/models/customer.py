"""
Customer profile model and schemas
"""
from pydantic import BaseModel, Field
from typing import Optional, Literal, List
from datetime import date, datetime


class CustomerAddress(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: str = "United States"


class NotificationPreferences(BaseModel):
    email: bool = True
    sms: bool = False
    push: bool = True


class CustomerPreferences(BaseModel):
    notifications: NotificationPreferences = Field(default_factory=NotificationPreferences)
    language: str = "en"
    timezone: Optional[str] = None
    currency: str = "USD"


class EmergencyContact(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    relationship: Optional[str] = None


class CustomerProfileUpdate(BaseModel):
    """Fields a customer can set on their own profile"""
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)
    date_of_birth: Optional[date] = None
    gender: Optional[Literal["male", "female", "other", "prefer_not_to_say"]] = None
    address: Optional[CustomerAddress] = None
    preferences: Optional[CustomerPreferences] = None
    emergency_contact: Optional[EmergencyContact] = None


class CustomerResponse(CustomerProfileUpdate):
    id: str = Field(alias="_id")
    owner_user_id: str
    total_bookings: int = 0
    total_spent: float = 0
    favorite_agencies: List[str] = Field(default_factory=list)
    is_active: bool = True
    is_verified: bool = False
    last_login_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}
