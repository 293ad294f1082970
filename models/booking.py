from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional
from datetime import datetime


class BookingRequest(BaseModel):
    # Loosely typed on purpose: bookings/validation.py owns the field rules
    # so clients get its messages instead of schema errors.
    name: Any = None
    phone: Any = None
    location: Any = None
    checkin: Any = None
    checkout: Any = None
    adults: Any = None
    children: Any = None
    rooms: Any = None


class BookingUpdate(BookingRequest):
    remark: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class BookingCreatedResponse(BaseModel):
    success: bool = True
    message: str = "Booking saved successfully"
    bookingId: str
    totalAmount: float
    pricePerNight: float
    nights: int


class BookingResponse(BaseModel):
    id: str = Field(alias="_id")
    name: str
    phone: str
    location: str
    checkin: datetime
    checkout: datetime
    adults: int
    children: int = 0
    rooms: int
    totalAmount: float
    remark: str = ""
    createdAt: datetime

    model_config = ConfigDict(populate_by_name=True)
