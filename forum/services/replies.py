"""Reply persistence."""

import logging

from sqlalchemy.orm import Session

from forum.models import Reply
from forum.services.persistence import translate_errors

logger = logging.getLogger(__name__)


def get_reply(session: Session, reply_id: int) -> Reply | None:
    with translate_errors(session, "get reply"):
        return session.get(Reply, reply_id)


def list_replies(session: Session) -> list[Reply]:
    with translate_errors(session, "list replies"):
        return session.query(Reply).order_by(Reply.reply_id).all()


def list_replies_for_thread(session: Session, thread_id: int) -> list[Reply]:
    with translate_errors(session, "list replies for thread"):
        return (
            session.query(Reply)
            .filter(Reply.thread_id == thread_id)
            .order_by(Reply.reply_id)
            .all()
        )


def create_reply(
    session: Session,
    content: str,
    thread_id: int,
    user_id: int,
    status: str,
) -> Reply:
    reply = Reply(content=content, thread_id=thread_id, user_id=user_id, status=status)
    with translate_errors(session, "create reply"):
        session.add(reply)
        session.commit()
        session.refresh(reply)
    logger.info(
        "Created reply reply_id=%s thread_id=%s user_id=%s",
        reply.reply_id,
        thread_id,
        user_id,
    )
    return reply


def update_reply(
    session: Session,
    reply: Reply,
    status: str,
    content: str | None = None,
) -> Reply:
    """Set status, and content when given."""
    with translate_errors(session, "update reply"):
        reply.status = status
        if content is not None:
            reply.content = content
        session.commit()
        session.refresh(reply)
    logger.info("Updated reply reply_id=%s status=%s", reply.reply_id, status)
    return reply


def delete_reply(session: Session, reply_id: int) -> int:
    with translate_errors(session, "delete reply"):
        deleted = (
            session.query(Reply)
            .filter(Reply.reply_id == reply_id)
            .delete(synchronize_session=False)
        )
        session.commit()
    if deleted:
        logger.info("Deleted reply reply_id=%s", reply_id)
    return deleted
