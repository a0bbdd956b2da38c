"""ORM model for top-level forum threads."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func

from forum.models.base import Base


class Thread(Base):
    """
    Discussion thread owned by a user.

    status is free text; 'active' and 'anonymous' are the values the client
    writes. Deleting a thread removes its replies first (see services.threads).
    """

    __tablename__ = "threads"

    thread_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(100), nullable=False)
    content = Column(Text, nullable=False)
    user_id = Column(
        Integer,
        ForeignKey("users.user_id"),
        nullable=False,
        index=True,
    )
    status = Column(String(32), nullable=False)
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
