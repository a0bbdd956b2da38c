"""ORM model for forum users (members and admins)."""

import uuid

from sqlalchemy import Column, DateTime, Integer, String, func

from forum.models.base import Base

ROLE_MEMBER = "member"
ROLE_ADMIN = "admin"


class User(Base):
    """
    Forum account created at registration.

    role: 'member' or 'admin'. password_hash is bcrypt output and is never
    serialized in an API response.
    """

    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    uuid = Column(
        String(36),
        nullable=False,
        unique=True,
        default=lambda: str(uuid.uuid4()),
    )
    username = Column(String(20), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(16), nullable=False, default=ROLE_MEMBER)
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
