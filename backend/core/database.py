# backend/core/database.py

from contextlib import contextmanager
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

from .config import settings
from .query_logger import setup_query_logging

logger = logging.getLogger(__name__)

DATABASE_URL = settings.database_url


def build_engine(url: str):
    """Create an engine with pool settings suited to the backing database."""
    engine_kwargs = {
        "echo": False,
        "pool_pre_ping": True,
    }

    if url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if url in {"sqlite://", "sqlite:///:memory:"}:
            engine_kwargs["poolclass"] = StaticPool
    else:
        engine_kwargs["pool_size"] = settings.db_pool_size
        engine_kwargs["max_overflow"] = settings.db_max_overflow

    new_engine = create_engine(url, **engine_kwargs)

    # Setup query logging and SQLite pragmas
    setup_query_logging(new_engine)
    return new_engine


engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session):
    """
    Run a unit of work against ``db`` and commit it once.

    Every write made inside the block lands together: any exception rolls
    the whole unit back and is re-raised to the caller.

    Example:
        with transaction(db):
            table.status = TableStatus.OCCUPIED
            reservation.status = ReservationStatus.SEATED
    """
    try:
        yield db
        db.commit()
    except Exception:
        logger.warning("Rolling back transaction", exc_info=True)
        db.rollback()
        raise
