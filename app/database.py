from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base

from .config import settings


def create_db_engine(url: str, **kwargs):
    """Build an engine, configured for the database type"""
    if url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
    elif settings.database_ssl:
        connect_args = {"sslmode": "require"}
    else:
        connect_args = {}

    engine = create_engine(url, connect_args=connect_args, **kwargs)

    if url.startswith("sqlite"):
        # SQLite ignores REFERENCES unless asked on every connection
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = create_db_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    """Dependency to get database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db(bind=None):
    """Initialize database with tables"""
    from . import models  # noqa: F401  registers the tables on Base
    Base.metadata.create_all(bind=bind or engine)
