"""
Package model and schemas
"""
from pydantic import BaseModel, Field, model_validator
from typing import List, Optional, Literal
from datetime import date, datetime

PackageCategory = Literal[
    "Adventure", "Beach", "City Break", "Cultural", "Cruise",
    "Mountain", "Safari", "Luxury", "Budget", "Family",
    "Honeymoon", "Business", "Religious", "Educational", "Food & Wine",
]

Difficulty = Literal["Easy", "Moderate", "Challenging", "Expert"]


class ItineraryItem(BaseModel):
    day: int = Field(..., ge=1)
    title: Optional[str] = None
    description: Optional[str] = None
    activities: List[str] = Field(default_factory=list)
    accommodation: Optional[str] = None
    meals: List[str] = Field(default_factory=list)


class PackageBase(BaseModel):
    package_name: str = Field(..., min_length=1, max_length=200)
    destination: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    duration_days: int = Field(..., ge=1)
    # Only set for slot-based services
    duration_minutes: Optional[int] = Field(None, ge=1, le=24 * 60)
    price: float = Field(..., ge=0)
    discount_price: Optional[float] = Field(None, ge=0)
    category: PackageCategory = "Adventure"
    inclusions: List[str] = Field(default_factory=list)
    exclusions: List[str] = Field(default_factory=list)
    itinerary: List[ItineraryItem] = Field(default_factory=list)
    max_group_size: int = Field(default=10, ge=1)
    min_age: int = Field(default=0, ge=0)
    difficulty: Difficulty = "Easy"
    images: List[str] = Field(default_factory=list)
    available_dates: List[date] = Field(default_factory=list)

    # Embedded promo (the only promo model the booking path reads)
    promo_code: Optional[str] = Field(None, max_length=40)
    promo_discount: float = Field(default=0, ge=0, le=50, description="Percent off the subtotal")
    promo_code_active: bool = False

    is_active: bool = True

    @model_validator(mode="after")
    def normalize_promo(self):
        if self.promo_code is not None:
            self.promo_code = self.promo_code.strip().upper() or None
        return self


class PackageCreate(PackageBase):
    pass


class PackageUpdate(BaseModel):
    package_name: Optional[str] = Field(None, min_length=1, max_length=200)
    destination: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    duration_days: Optional[int] = Field(None, ge=1)
    duration_minutes: Optional[int] = Field(None, ge=1, le=24 * 60)
    price: Optional[float] = Field(None, ge=0)
    discount_price: Optional[float] = Field(None, ge=0)
    category: Optional[PackageCategory] = None
    inclusions: Optional[List[str]] = None
    exclusions: Optional[List[str]] = None
    itinerary: Optional[List[ItineraryItem]] = None
    max_group_size: Optional[int] = Field(None, ge=1)
    min_age: Optional[int] = Field(None, ge=0)
    difficulty: Optional[Difficulty] = None
    images: Optional[List[str]] = None
    available_dates: Optional[List[date]] = None
    promo_code: Optional[str] = Field(None, max_length=40)
    promo_discount: Optional[float] = Field(None, ge=0, le=50)
    promo_code_active: Optional[bool] = None
    is_active: Optional[bool] = None


class PackageResponse(PackageBase):
    id: str = Field(alias="_id")
    agency_id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}
