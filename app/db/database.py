# /app/db/database.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from ..core.config import settings

DATABASE_URL = settings.database_url

# The 'check_same_thread' argument is only needed for SQLite. Aggregation
# queries run on worker threads, each with its own session.
engine_args = {"connect_args": {"check_same_thread": False}} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, **engine_args)

# Each instance of this class is a database session.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Dependency to get a DB session for the lifetime of one request.
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# Dependency for code that opens its own short-lived sessions (concurrent
# aggregation queries, detached audit writes).
def get_session_factory() -> sessionmaker:
    return SessionLocal
