"""Password hashing and JWT creation/verification for the per-request role check."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from forum.core.config import get_settings


def _password_bytes(plain_password: str) -> bytes:
    # bcrypt reads at most 72 bytes; validation already caps passwords at 30 chars.
    return plain_password.encode("utf-8")[:72]


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    cost = rounds if rounds is not None else get_settings().BCRYPT_ROUNDS
    return bcrypt.hashpw(_password_bytes(plain_password), bcrypt.gensalt(rounds=cost)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(sub: str | int, role: str) -> str:
    """Create a JWT access token with sub (user id), role, and exp."""
    settings = get_settings()
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(sub),
        "role": role,
        "exp": expire,
        "iat": now,
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (sub, role, exp, iat).
    Raises jwt.PyJWTError on invalid or expired token.
    """
    settings = get_settings()
    return jwt.decode(
        token,
        settings.JWT_SECRET.get_secret_value(),
        algorithms=[settings.JWT_ALGORITHM],
    )
