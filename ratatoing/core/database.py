"""Engine and per-request sessions for the Ratatoing store (PostgreSQL, or sqlite outside prod)."""

from collections.abc import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ratatoing.core.config import SQLITE_URL_PREFIX, settings

# sqlite connections are shared across the threadpool FastAPI runs sync handlers on.
_connect_args = (
    {"check_same_thread": False}
    if settings.DATABASE_URL.startswith(SQLITE_URL_PREFIX)
    else {}
)

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.DEBUG,
    connect_args=_connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    One session per request. Services commit or roll back their own unit of work;
    this only guarantees the session is closed afterwards.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Health check: True when a trivial query succeeds."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        db.rollback()
        return False
