"""
Reservation model and schemas
Covers slot-based appointments and multi-day travel bookings in one record
"""
from pydantic import BaseModel, Field, model_validator
from typing import Optional, List, Literal, Union, Annotated
from datetime import date, datetime

ReservationStatus = Literal["pending", "confirmed", "cancelled"]
ACTIVE_STATUSES = ("pending", "confirmed")


class TravelerInfo(BaseModel):
    """Individual traveler on a travel booking"""
    name: str = Field(..., min_length=1, max_length=200)
    age: Optional[int] = Field(None, ge=0, le=130)
    gender: Optional[Literal["Male", "Female", "Other"]] = None
    passport_number: Optional[str] = Field(None, max_length=50)
    nationality: Optional[str] = Field(None, max_length=100)
    dietary_restrictions: Optional[str] = None
    medical_conditions: Optional[str] = None


class _BookingRequestBase(BaseModel):
    agency_id: str = Field(..., min_length=1)
    package_id: str = Field(..., min_length=1)
    date: date
    notes: str = ""


class SlotBooking(_BookingRequestBase):
    """Appointment at a concrete time of day"""
    kind: Literal["slot"] = "slot"
    start_time: str = Field(..., pattern=r"^([01]\d|2[0-3]):[0-5]\d$", description="HH:MM")


class TravelBooking(_BookingRequestBase):
    """Multi-day package starting on ``date``"""
    kind: Literal["travel"] = "travel"
    number_of_travelers: int = Field(default=1, ge=1)
    travelers: List[TravelerInfo] = Field(default_factory=list)
    promo_code: Optional[str] = Field(None, max_length=40)

    @model_validator(mode="after")
    def truncate_travelers(self):
        # Details beyond the booked head count are dropped
        if len(self.travelers) > self.number_of_travelers:
            self.travelers = self.travelers[:self.number_of_travelers]
        return self


ReservationRequest = Annotated[Union[SlotBooking, TravelBooking], Field(discriminator="kind")]


class AgencyStatusUpdate(BaseModel):
    status: str
    business_notes: Optional[str] = None


class CustomerCancellation(BaseModel):
    reason: Optional[str] = None


class ReservationResponse(BaseModel):
    id: str = Field(alias="_id")
    kind: Literal["slot", "travel"]
    business_id: str
    service_id: str
    customer_user_id: str
    appointment_date: date
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    number_of_travelers: Optional[int] = None
    travelers: List[TravelerInfo] = Field(default_factory=list)
    promo_code: Optional[str] = None
    base_price: float
    subtotal: float
    discount: float = 0
    total_price: float = Field(..., ge=0)
    notes: str = ""
    business_notes: Optional[str] = None
    status: ReservationStatus = "pending"

    # Snapshot of the customer at booking time
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None

    payment_status: Literal["pending", "paid", "refunded", "partial"] = "pending"
    cancelled_at: Optional[datetime] = None
    cancelled_by: Optional[Literal["customer", "business", "system"]] = None
    cancellation_reason: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}
