import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field

# Largest value an INTEGER column holds
MAX_INT = 2**31 - 1


class SearchRequest(BaseModel):
    date: dt.date
    time: dt.time
    party_size: int = Field(alias="partySize", gt=0, le=MAX_INT)

    class Config:
        populate_by_name = True


class RestaurantAvailability(BaseModel):
    id: int
    name: str
    capacity: int
    cuisine: Optional[str] = None
    booked_count: int
    available_slots: int

    class Config:
        from_attributes = True


class BookingCreate(BaseModel):
    restaurant_id: int = Field(alias="restaurantId", le=MAX_INT)
    customer_name: Optional[str] = Field(default=None, alias="customerName")
    party_size: int = Field(alias="partySize", gt=0, le=MAX_INT)
    booking_time: dt.datetime = Field(alias="bookingTime")
    deposit: Optional[float] = Field(default=None, ge=0)

    class Config:
        populate_by_name = True


class Booking(BaseModel):
    id: int
    restaurant_id: int
    customer_name: Optional[str] = None
    party_size: int
    booking_time: dt.datetime
    status: str
    deposit_amount: float

    class Config:
        from_attributes = True


class BookingResponse(BaseModel):
    message: str
    booking: Booking


class ErrorResponse(BaseModel):
    error: str
