"""PostgreSQL connection pool and session management."""

import logging
from collections.abc import Generator

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from forum.core.config import Settings, settings

logger = logging.getLogger(__name__)


def build_engine(app_settings: Settings) -> Engine:
    """Create the process-wide engine with a bounded connection pool."""
    return create_engine(
        app_settings.DATABASE_URL,
        pool_size=app_settings.DB_POOL_SIZE,
        max_overflow=app_settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,
        echo=app_settings.DEBUG,
    )


engine = build_engine(settings)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        logger.warning("Database connectivity check failed", exc_info=True)
        return False


def dispose_engine() -> None:
    """Close every pooled connection; called on application shutdown."""
    engine.dispose()
    logger.info("Database connection pool disposed")
