from datetime import date
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class BookingStatus(str, Enum):
    """Booking status values."""
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class Booking(BaseModel):
    """Booking record as held by the store and returned to clients."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    hotel_name: str = Field(alias="hotelName")
    guest_name: str = Field(alias="guestName")
    check_in_date: date = Field(alias="checkInDate")
    check_out_date: date = Field(alias="checkOutDate")
    status: str = BookingStatus.PENDING.value


class BookingInput(BaseModel):
    """Create/update payload. Presence of fields is checked by the lifecycle."""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    hotel_name: Optional[str] = Field(None, alias="hotelName")
    guest_name: Optional[str] = Field(None, alias="guestName")
    check_in_date: Optional[date] = Field(None, alias="checkInDate")
    check_out_date: Optional[date] = Field(None, alias="checkOutDate")
    status: Optional[str] = Field(None, description="Booking status (PENDING, CONFIRMED, CANCELLED)")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    timestamp: str
    bookings: int
    flipt_connected: bool
