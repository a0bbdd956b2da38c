"""
Input validation rules for users, threads and replies.

Every rule returns None when the input is valid, otherwise the exact message
sent back to the client. Checks run in one fixed order for every entity:
required fields, upper length bounds, lower length bounds, then format. The
first failing rule wins.
"""

import re
from typing import Any

from forum.models.reply import REPLY_STATUSES
from forum.models.user import ROLE_ADMIN, ROLE_MEMBER

USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 20
PASSWORD_MIN_LEN = 4
PASSWORD_MAX_LEN = 30
USER_ROLES = (ROLE_MEMBER, ROLE_ADMIN)

TITLE_MIN_LEN = 10
TITLE_MAX_LEN = 100
THREAD_CONTENT_MIN_LEN = 20
THREAD_CONTENT_MAX_LEN = 2000
THREAD_STATUS_MAX_LEN = 32

REPLY_CONTENT_MIN_LEN = 10
REPLY_CONTENT_MAX_LEN = 2000

# Largest id accepted in a path segment.
MAX_ENTITY_ID = 99_999_999

_USERNAME_RE = re.compile(r"^[a-zA-Z0-9]+$")
_ID_RE = re.compile(r"^[0-9]+$")


def _all_present(*values: Any) -> bool:
    # None, "" and 0 all count as missing.
    return all(values)


def parse_entity_id(raw: str) -> int | None:
    """Return the integer id for a path segment, or None if it is not a valid id."""
    if not raw or not _ID_RE.match(raw):
        return None
    value = int(raw)
    if value < 1 or value > MAX_ENTITY_ID:
        return None
    return value


def _check_body_id(value: int, entity: str) -> str | None:
    if value < 1 or value > MAX_ENTITY_ID:
        return f"Invalid {entity} ID"
    return None


def _check_user_lengths(username: str | None, password: str | None) -> str | None:
    if (username is not None and len(username) > USERNAME_MAX_LEN) or (
        password is not None and len(password) > PASSWORD_MAX_LEN
    ):
        return (
            f"Username must be at most {USERNAME_MAX_LEN} characters "
            f"and password at most {PASSWORD_MAX_LEN} characters"
        )
    if (username is not None and len(username) < USERNAME_MIN_LEN) or (
        password is not None and len(password) < PASSWORD_MIN_LEN
    ):
        return (
            f"Username must be at least {USERNAME_MIN_LEN} characters "
            f"and password at least {PASSWORD_MIN_LEN} characters"
        )
    return None


def _check_user_format(username: str | None, role: str | None) -> str | None:
    if username is not None and not _USERNAME_RE.match(username):
        return "Username must not contain special characters"
    if role is not None and role not in USER_ROLES:
        return "Role must be either member or admin"
    return None


def validate_user(
    username: str | None,
    password: str | None,
    role: str | None,
) -> str | None:
    """Validate a registration payload."""
    if not _all_present(username, password, role):
        return "Username, password, and role are required"
    return _check_user_lengths(username, password) or _check_user_format(
        username, role
    )


def validate_user_update(
    username: str | None,
    password: str | None,
    role: str | None,
) -> str | None:
    """Validate a partial user update; only the fields that were sent are checked."""
    if username is None and password is None and role is None:
        return "At least one of username, password, or role is required"
    return _check_user_lengths(username, password) or _check_user_format(
        username, role
    )


def validate_login(username: str | None, password: str | None) -> str | None:
    if not username and not password:
        return "Username and password are required"
    if not username:
        return "Username is required"
    if not password:
        return "Password is required"
    return None


def _check_thread_body(title: str, content: str, status: str) -> str | None:
    if len(title) > TITLE_MAX_LEN:
        return f"Title cannot be longer than {TITLE_MAX_LEN} characters"
    if len(title) < TITLE_MIN_LEN:
        return f"Title must be at least {TITLE_MIN_LEN} characters long"
    if len(content) > THREAD_CONTENT_MAX_LEN:
        return f"Content cannot be longer than {THREAD_CONTENT_MAX_LEN} characters"
    if len(content) < THREAD_CONTENT_MIN_LEN:
        return f"Content must be at least {THREAD_CONTENT_MIN_LEN} characters long"
    if len(status) > THREAD_STATUS_MAX_LEN:
        return f"Status cannot be longer than {THREAD_STATUS_MAX_LEN} characters"
    return None


def validate_thread(
    title: str | None,
    content: str | None,
    user_id: int | None,
    status: str | None,
) -> str | None:
    """Validate a new thread."""
    if not _all_present(title, content, user_id, status):
        return "Title, content, user_id, and status are required"
    return _check_body_id(user_id, "user") or _check_thread_body(title, content, status)


def validate_thread_update(
    title: str | None,
    content: str | None,
    status: str | None,
) -> str | None:
    if not _all_present(title, content, status):
        return "Title, content, and status are required"
    return _check_thread_body(title, content, status)


def _check_reply_content(content: str) -> str | None:
    if len(content) > REPLY_CONTENT_MAX_LEN:
        return f"Content cannot be longer than {REPLY_CONTENT_MAX_LEN} characters"
    if len(content) < REPLY_CONTENT_MIN_LEN:
        return f"Content must be at least {REPLY_CONTENT_MIN_LEN} characters long"
    return None


def _check_reply_status(status: str) -> str | None:
    if status not in REPLY_STATUSES:
        return f"Status must be one of: {', '.join(REPLY_STATUSES)}"
    return None


def validate_reply(
    content: str | None,
    thread_id: int | None,
    user_id: int | None,
    status: str | None,
) -> str | None:
    """Validate a new reply."""
    if not _all_present(content, thread_id, user_id, status):
        return "Content, thread_id, user_id, and status are required"
    return (
        _check_body_id(thread_id, "thread")
        or _check_body_id(user_id, "user")
        or _check_reply_content(content)
        or _check_reply_status(status)
    )


def validate_reply_update(content: str | None, status: str | None) -> str | None:
    """Validate a reply update: status is required, content is optional."""
    if not status:
        return "Status is required"
    if content is not None:
        content_error = _check_reply_content(content)
        if content_error:
            return content_error
    return _check_reply_status(status)
