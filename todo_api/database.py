from datetime import datetime, UTC

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, declarative_base
from todo_api.config import database_url, database_connect_args

DATABASE_URL = database_url()

# One pooled engine per process; sessions are borrowed per request.
# pool_pre_ping drops stale connections (useful for managed cloud DBs)
engine = create_engine(
    DATABASE_URL,
    connect_args=database_connect_args(DATABASE_URL),
    pool_pre_ping=True,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_connection(bind=None):
    """Run a trivial query against the store; raises if it is unreachable."""
    with (bind or engine).connect() as conn:
        return conn.execute(text("SELECT 1 + 1")).scalar()


def utcnow():
    """Naive UTC timestamp; the store keeps datetimes without tzinfo."""
    return datetime.now(UTC).replace(tzinfo=None)
