from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .database import SessionLocal, init_db
from .models import Restaurant

DEMO_RESTAURANTS = [
    dict(name="The Local Bistro", capacity=40, cuisine="Filipino Fusion", city="Manila"),
    dict(name="Café Solace", capacity=24, cuisine="Coffee & Brunch", city="Quezon City"),
    dict(name="Grill Master PH", capacity=60, cuisine="Barbecue", city="Makati"),
    dict(name="Sinigang Street", capacity=16, cuisine="Home-style Filipino", city="Pasig"),
    # Lapsed subscription: never returned by search
    dict(name="Harbor Seafood House", capacity=80, cuisine="Seafood", city="Cebu",
         subscription_active=False),
]


def init_database(db: Optional[Session] = None) -> int:
    """Create the tables and seed demo restaurants into an empty database.

    Returns the number of restaurants added.
    """
    owns_session = db is None
    if owns_session:
        init_db()
        db = SessionLocal()
    else:
        init_db(bind=db.get_bind())

    try:
        # Check if data already exists
        if db.query(Restaurant).first():
            print("Database already initialized. Skipping...")
            return 0

        restaurants = [Restaurant(**data) for data in DEMO_RESTAURANTS]
        db.add_all(restaurants)
        db.commit()

        print("✅ Database initialized successfully!")
        print(f"   - Created {len(restaurants)} restaurants")
        return len(restaurants)

    except SQLAlchemyError as e:
        print(f"❌ Error initializing database: {e}")
        db.rollback()
        raise
    finally:
        if owns_session:
            db.close()

if __name__ == "__main__":
    init_database()
