import logging
from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional

from sqlalchemy import and_, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .models import Booking, Restaurant, STATUS_CANCELLED, STATUS_CONFIRMED

logger = logging.getLogger(__name__)

# Fixed turnover heuristic: a booking occupies its seats for the hour after it starts
LOOKBACK_WINDOW = timedelta(hours=1)


class ReservationService:
    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def lookback_window(target_date: date, target_time: time) -> tuple[datetime, datetime]:
        """Return the inclusive ``(start, end)`` window ending at the target time"""
        target = datetime.combine(target_date, target_time)
        return target - LOOKBACK_WINDOW, target

    def search_available(self, target_date: date, target_time: time, party_size: int) -> List[Dict]:
        """
        Find subscribed restaurants that can still seat ``party_size`` guests.

        Party sizes of bookings starting within the hour before the target time
        are summed per restaurant; a restaurant is kept when its capacity covers
        that sum plus the new party. This is a read-time check only and does not
        reserve anything.
        """
        window_start, window_end = self.lookback_window(target_date, target_time)
        booked_count = func.coalesce(func.sum(Booking.party_size), 0)

        rows = (
            self.db.query(
                Restaurant.id,
                Restaurant.name,
                Restaurant.capacity,
                Restaurant.cuisine,
                booked_count.label("booked_count"),
            )
            .outerjoin(
                Booking,
                and_(
                    Booking.restaurant_id == Restaurant.id,
                    Booking.booking_time >= window_start,
                    Booking.booking_time <= window_end,
                    Booking.status != STATUS_CANCELLED,
                ),
            )
            .filter(Restaurant.subscription_active == True)  # noqa: E712
            .group_by(Restaurant.id, Restaurant.name, Restaurant.capacity, Restaurant.cuisine)
            .having(Restaurant.capacity >= party_size + booked_count)
            .order_by(Restaurant.name)
            .all()
        )

        results = []
        for row in rows:
            booked = int(row.booked_count or 0)
            results.append({
                "id": row.id,
                "name": row.name,
                "capacity": row.capacity,
                "cuisine": row.cuisine,
                "booked_count": booked,
                "available_slots": row.capacity - booked,
            })

        logger.debug(
            "Search %s..%s for %d guests matched %d restaurants",
            window_start, window_end, party_size, len(results),
        )
        return results

    def create_booking(
        self,
        restaurant_id: int,
        customer_name: Optional[str],
        party_size: int,
        booking_time: datetime,
        deposit: Optional[float] = None,
    ) -> Booking:
        """Insert a confirmed booking and return it"""
        # Capacity is not re-checked here; a search moments earlier guarantees nothing
        booking = Booking(
            restaurant_id=restaurant_id,
            customer_name=customer_name,
            party_size=party_size,
            booking_time=booking_time,
            deposit_amount=deposit or 0.00,
            status=STATUS_CONFIRMED,
        )
        try:
            self.db.add(booking)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(booking)

        logger.info(
            "Booking %s created: restaurant=%s party=%s at %s",
            booking.id, restaurant_id, party_size, booking_time,
        )
        return booking
