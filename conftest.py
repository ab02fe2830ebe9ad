import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, create_db_engine, get_db
from app.main import app
from app.models import Restaurant


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def restaurants(db):
    """Three subscribed restaurants and one with a lapsed subscription"""
    rows = [
        Restaurant(name="The Local Bistro", capacity=10, cuisine="Filipino Fusion", city="Manila"),
        Restaurant(name="Café Solace", capacity=6, cuisine="Coffee & Brunch", city="Quezon City"),
        Restaurant(name="Grill Master PH", capacity=20, cuisine="Barbecue", city="Makati"),
        Restaurant(name="Harbor Seafood House", capacity=50, cuisine="Seafood", city="Cebu",
                   subscription_active=False),
    ]
    db.add_all(rows)
    db.commit()
    return {r.name: r for r in rows}


@pytest.fixture
def client(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
