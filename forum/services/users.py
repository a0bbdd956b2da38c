"""User persistence: registration, lookup, update, login check and cascading delete."""

import logging

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from forum.core.security import hash_password, verify_password
from forum.models import Reply, Thread, User
from forum.services.persistence import transaction, translate_errors

logger = logging.getLogger(__name__)


def get_user(session: Session, user_id: int) -> User | None:
    with translate_errors(session, "get user"):
        return session.get(User, user_id)


def get_user_by_username(session: Session, username: str) -> User | None:
    with translate_errors(session, "get user by username"):
        return session.query(User).filter(User.username == username).first()


def list_users(session: Session) -> list[User]:
    with translate_errors(session, "list users"):
        return session.query(User).order_by(User.user_id).all()


def create_user(session: Session, username: str, password: str, role: str) -> User:
    """Insert a new user with a bcrypt hash of password. Raises DuplicateRecordError on a taken username."""
    user = User(
        username=username,
        password_hash=hash_password(password),
        role=role,
    )
    with translate_errors(session, "create user"):
        session.add(user)
        session.commit()
        session.refresh(user)
    logger.info("Created user user_id=%s role=%s", user.user_id, user.role)
    return user


def update_user(
    session: Session,
    user: User,
    username: str | None = None,
    password: str | None = None,
    role: str | None = None,
) -> User:
    """Apply the given fields to user; None means unchanged."""
    with translate_errors(session, "update user"):
        if username is not None:
            user.username = username
        if password is not None:
            user.password_hash = hash_password(password)
        if role is not None:
            user.role = role
        session.commit()
        session.refresh(user)
    logger.info("Updated user user_id=%s", user.user_id)
    return user


def authenticate(session: Session, username: str, password: str) -> User | None:
    """Return the user when username exists and password matches its hash, else None."""
    user = get_user_by_username(session, username)
    if user is None:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def delete_user_cascade(session: Session, user_id: int) -> int:
    """
    Delete a user together with everything that depends on it, in one transaction.

    Removes replies written by the user or posted on the user's threads, then
    the user's threads, then the user. Returns the number of users deleted
    (0 or 1). Raises ForeignKeyViolationError if other rows still reference the user.
    """
    owned_threads = select(Thread.thread_id).where(Thread.user_id == user_id)
    with transaction(session, "delete user") as tx:
        replies_deleted = (
            tx.query(Reply)
            .filter(or_(Reply.user_id == user_id, Reply.thread_id.in_(owned_threads)))
            .delete(synchronize_session=False)
        )
        threads_deleted = (
            tx.query(Thread)
            .filter(Thread.user_id == user_id)
            .delete(synchronize_session=False)
        )
        users_deleted = (
            tx.query(User)
            .filter(User.user_id == user_id)
            .delete(synchronize_session=False)
        )
    logger.info(
        "Deleted user user_id=%s threads_deleted=%s replies_deleted=%s",
        user_id,
        threads_deleted,
        replies_deleted,
    )
    return users_deleted
