"""Database error translation and transaction scope shared by the entity services."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE codes.
PG_FOREIGN_KEY_VIOLATION = "23503"
PG_UNIQUE_VIOLATION = "23505"


class PersistenceError(Exception):
    """Raised when a database operation fails for a reason the caller cannot fix."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class ForeignKeyViolationError(PersistenceError):
    """Raised when a write is rejected because of dependent or missing rows."""


class DuplicateRecordError(PersistenceError):
    """Raised when a write trips a unique constraint."""


def _sqlstate(exc: IntegrityError) -> str | None:
    orig = exc.orig
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    if _sqlstate(exc) == PG_FOREIGN_KEY_VIOLATION:
        return True
    return "FOREIGN KEY" in str(exc.orig).upper()


def is_unique_violation(exc: IntegrityError) -> bool:
    if _sqlstate(exc) == PG_UNIQUE_VIOLATION:
        return True
    return "UNIQUE" in str(exc.orig).upper()


@contextmanager
def translate_errors(session: Session, action: str) -> Iterator[None]:
    """Roll back and re-raise SQLAlchemy failures as PersistenceError subclasses."""
    try:
        yield
    except IntegrityError as e:
        session.rollback()
        if is_foreign_key_violation(e):
            raise ForeignKeyViolationError(f"{action}: foreign key violation", e) from e
        if is_unique_violation(e):
            raise DuplicateRecordError(f"{action}: duplicate record", e) from e
        raise PersistenceError(f"{action}: integrity error", e) from e
    except SQLAlchemyError as e:
        session.rollback()
        raise PersistenceError(f"{action}: database error", e) from e


@contextmanager
def transaction(session: Session, action: str) -> Iterator[Session]:
    """
    Run several statements atomically: commit on success, roll back on any error.

    Database errors come out translated (see translate_errors); any other
    exception is re-raised unchanged after the rollback.
    """
    with translate_errors(session, action):
        try:
            yield session
        except SQLAlchemyError:
            raise
        except Exception:
            session.rollback()
            raise
        session.commit()
