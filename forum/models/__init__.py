"""SQLAlchemy ORM models."""

from forum.models.base import Base
from forum.models.reply import Reply
from forum.models.thread import Thread
from forum.models.user import User

__all__ = ["Base", "Reply", "Thread", "User"]
