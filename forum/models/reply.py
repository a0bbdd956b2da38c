"""ORM model for replies attached to a thread."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func

from forum.models.base import Base

REPLY_STATUSES = ("active", "anonymous", "correct")


class Reply(Base):
    """Reply to a thread. status: 'active', 'anonymous' or 'correct'."""

    __tablename__ = "replies"

    reply_id = Column(Integer, primary_key=True, autoincrement=True)
    content = Column(Text, nullable=False)
    thread_id = Column(
        Integer,
        ForeignKey("threads.thread_id"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        Integer,
        ForeignKey("users.user_id"),
        nullable=False,
        index=True,
    )
    status = Column(String(16), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
