#!/usr/bin/env python3
"""
Simple database viewer for Reserve.PH
Shows all restaurants and bookings
"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.database import SessionLocal
from app.models import Booking, Restaurant, BOOKING_STATUSES


def view_database(db: Optional[Session] = None):
    """View all database contents"""
    owns_session = db is None
    db = db or SessionLocal()

    print("🍽️ Reserve.PH - Database Viewer")
    print("=" * 60)

    try:
        # View Restaurants
        print("\n🏠 RESTAURANTS:")
        print("-" * 30)
        for r in db.query(Restaurant).order_by(Restaurant.name).all():
            active = "yes" if r.subscription_active else "no"
            print(f"ID: {r.id}, Name: {r.name}, Capacity: {r.capacity}, Cuisine: {r.cuisine}, "
                  f"City: {r.city}, Subscribed: {active}, Commission: {r.daily_commission_rate}")

        # View Bookings
        print("\n📅 BOOKINGS:")
        print("-" * 30)
        bookings = (
            db.query(Booking, Restaurant.name)
            .join(Restaurant, Booking.restaurant_id == Restaurant.id)
            .order_by(Booking.booking_time.desc())
            .all()
        )
        if bookings:
            print(f"{'ID':<4} {'Customer':<15} {'Restaurant':<22} {'Party':<6} {'Time':<17} {'Status':<10} {'Deposit':<8}")
            print("-" * 86)
            for b, restaurant_name in bookings:
                when = b.booking_time.strftime("%Y-%m-%d %H:%M")
                print(f"{b.id:<4} {b.customer_name or '':<15} {restaurant_name:<22} {b.party_size:<6} "
                      f"{when:<17} {b.status:<10} {b.deposit_amount}")
        else:
            print("No bookings found.")

        # Summary
        print("\n📊 SUMMARY:")
        print("-" * 30)
        counts = dict(db.query(Booking.status, func.count(Booking.id)).group_by(Booking.status).all())
        print(f"Total Bookings: {sum(counts.values())}")
        for status in BOOKING_STATUSES:
            print(f"{status}: {counts.get(status, 0)}")
        return counts

    finally:
        if owns_session:
            db.close()

if __name__ == "__main__":
    view_database()
