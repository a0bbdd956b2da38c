"""Python client for the forum API: HTTP calls, session storage and view state."""

from forum.client.api import ForumApiError, ForumClient
from forum.client.session import FileSessionStore, MemorySessionStore
from forum.client.state import (
    AdminRequiredError,
    FeedReply,
    FeedThread,
    ForumState,
    NotLoggedInError,
)

__all__ = [
    "AdminRequiredError",
    "FeedReply",
    "FeedThread",
    "FileSessionStore",
    "ForumApiError",
    "ForumClient",
    "ForumState",
    "MemorySessionStore",
    "NotLoggedInError",
]
