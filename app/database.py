"""
Database engine, session factory and table bootstrap.
"""
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from app.config import settings

logger = logging.getLogger(__name__)

# Sessions cross threadpool workers in sync endpoints
connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args = {"check_same_thread": False}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args, echo=settings.DEBUG)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def init_db(bind=None) -> None:
    """Create the purchase order and cost record tables if missing."""
    import app.models  # noqa: F401  (register models on Base.metadata)

    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logger.info("Database tables ready (%s)", bind.url)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
