from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Boolean, Numeric, CheckConstraint
from sqlalchemy.orm import relationship

from .database import Base

STATUS_CONFIRMED = "Confirmed"
STATUS_COMPLETED = "Completed"
STATUS_CANCELLED = "Cancelled"
BOOKING_STATUSES = (STATUS_CONFIRMED, STATUS_COMPLETED, STATUS_CANCELLED)


class Restaurant(Base):
    """Subscribed restaurants and their total seating"""
    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    capacity = Column(Integer, nullable=False)  # never decremented, availability is computed
    subscription_active = Column(Boolean, default=True, nullable=False)
    daily_commission_rate = Column(Numeric(3, 2), default=0.10)
    city = Column(String(100))
    cuisine = Column(String(100))

    bookings = relationship("Booking", back_populates="restaurant")


class Booking(Base):
    """Customer bookings"""
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("party_size > 0", name="ck_bookings_party_size_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"))
    customer_name = Column(String(100))
    party_size = Column(Integer, nullable=False)
    booking_time = Column(DateTime, nullable=False, index=True)
    status = Column(String(50), default=STATUS_CONFIRMED, nullable=False)  # Confirmed, Completed, Cancelled
    deposit_amount = Column(Numeric(10, 2), default=0.00)

    restaurant = relationship("Restaurant", back_populates="bookings")

    # Note: capacity is only checked when searching, inserts are never re-validated
