"""
Agency model and schemas
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List, Literal
from datetime import datetime

AgencyCategory = Literal[
    "Adventure Tours", "Beach Holidays", "City Breaks", "Cultural Tours",
    "Cruise Packages", "Mountain Expeditions", "Safari Tours", "Luxury Travel",
    "Budget Travel", "Family Packages", "Honeymoon Specials", "Business Travel",
    "Religious Tours", "Educational Tours", "Food & Wine Tours", "Other",
]


class AgencyAddress(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zipcode: Optional[str] = None
    country: Optional[str] = None


class DayHours(BaseModel):
    open: str = Field(default="09:00", pattern=r"^\d{2}:\d{2}$")
    close: str = Field(default="17:00", pattern=r"^\d{2}:\d{2}$")
    closed: bool = False


class WeeklyHours(BaseModel):
    monday: DayHours = Field(default_factory=DayHours)
    tuesday: DayHours = Field(default_factory=DayHours)
    wednesday: DayHours = Field(default_factory=DayHours)
    thursday: DayHours = Field(default_factory=DayHours)
    friday: DayHours = Field(default_factory=DayHours)
    saturday: DayHours = Field(default_factory=DayHours)
    sunday: DayHours = Field(default_factory=DayHours)


class SocialMedia(BaseModel):
    facebook: Optional[str] = None
    instagram: Optional[str] = None
    twitter: Optional[str] = None
    youtube: Optional[str] = None
    linkedin: Optional[str] = None


class AgencyBase(BaseModel):
    agency_name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    category: AgencyCategory
    email: EmailStr
    phone: str = Field(..., min_length=5, max_length=30)
    website: Optional[str] = None
    image_url: Optional[str] = None
    license_number: Optional[str] = None
    year_established: Optional[int] = Field(None, ge=1800, le=2100)
    specializations: List[str] = Field(default_factory=list)
    address: AgencyAddress = Field(default_factory=AgencyAddress)
    hours: WeeklyHours = Field(default_factory=WeeklyHours)
    social_media: SocialMedia = Field(default_factory=SocialMedia)


class AgencyCreate(AgencyBase):
    pass


class AgencyUpdate(BaseModel):
    agency_name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[AgencyCategory] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=5, max_length=30)
    website: Optional[str] = None
    image_url: Optional[str] = None
    license_number: Optional[str] = None
    year_established: Optional[int] = Field(None, ge=1800, le=2100)
    specializations: Optional[List[str]] = None
    address: Optional[AgencyAddress] = None
    hours: Optional[WeeklyHours] = None
    social_media: Optional[SocialMedia] = None


class AgencyResponse(AgencyBase):
    id: str = Field(alias="_id")
    owner_user_id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}
