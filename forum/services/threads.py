"""Thread persistence."""

import logging

from sqlalchemy.orm import Session

from forum.models import Reply, Thread
from forum.services.persistence import transaction, translate_errors

logger = logging.getLogger(__name__)


def get_thread(session: Session, thread_id: int) -> Thread | None:
    with translate_errors(session, "get thread"):
        return session.get(Thread, thread_id)


def list_threads(session: Session) -> list[Thread]:
    with translate_errors(session, "list threads"):
        return session.query(Thread).order_by(Thread.thread_id).all()


def create_thread(
    session: Session,
    title: str,
    content: str,
    user_id: int,
    status: str,
) -> Thread:
    thread = Thread(title=title, content=content, user_id=user_id, status=status)
    with translate_errors(session, "create thread"):
        session.add(thread)
        session.commit()
        session.refresh(thread)
    logger.info("Created thread thread_id=%s user_id=%s", thread.thread_id, user_id)
    return thread


def update_thread(
    session: Session,
    thread: Thread,
    title: str,
    content: str,
    status: str,
) -> Thread:
    with translate_errors(session, "update thread"):
        thread.title = title
        thread.content = content
        thread.status = status
        session.commit()
        session.refresh(thread)
    logger.info("Updated thread thread_id=%s", thread.thread_id)
    return thread


def delete_thread_cascade(session: Session, thread_id: int) -> int:
    """Delete a thread and its replies atomically. Returns the number of threads deleted."""
    with transaction(session, "delete thread") as tx:
        replies_deleted = (
            tx.query(Reply)
            .filter(Reply.thread_id == thread_id)
            .delete(synchronize_session=False)
        )
        threads_deleted = (
            tx.query(Thread)
            .filter(Thread.thread_id == thread_id)
            .delete(synchronize_session=False)
        )
    if threads_deleted:
        logger.info(
            "Deleted thread thread_id=%s replies_deleted=%s", thread_id, replies_deleted
        )
    return threads_deleted
