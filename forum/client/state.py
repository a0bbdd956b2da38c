"""
Client view state: who is logged in, what the feed shows, and which actions are allowed.

Rendering is left to the UI; this module holds the state the UI reflects and
issues the HTTP calls behind each user action.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any

from forum.client.api import ForumClient
from forum.client.session import MemorySessionStore, load_user, save_user

logger = logging.getLogger(__name__)

ANONYMOUS_NAME = "Anonymous"
STATUS_ACTIVE = "active"
STATUS_ANONYMOUS = "anonymous"
STATUS_CORRECT = "correct"

LOGIN_ROUTE = "/login"
REGISTER_ROUTE = "/register"
HOME_ROUTE = "/home"
PUBLIC_ROUTES = frozenset({LOGIN_ROUTE, REGISTER_ROUTE})


class NotLoggedInError(Exception):
    """Raised when an action needs a logged-in user and the session is empty."""


class AdminRequiredError(Exception):
    """Raised when a non-admin attempts an admin-only action such as replying anonymously."""


@dataclass
class FeedReply:
    reply_id: int
    author: str
    content: str
    status: str

    @property
    def is_correct(self) -> bool:
        return self.status == STATUS_CORRECT


@dataclass
class FeedThread:
    thread_id: int
    title: str
    content: str
    author: str
    status: str
    replies: list[FeedReply] = field(default_factory=list)


def display_author(post: dict[str, Any], usernames: dict[int, str]) -> str:
    """Author label for a thread or reply; anonymous posts hide the username."""
    if post.get("status") == STATUS_ANONYMOUS:
        return ANONYMOUS_NAME
    user_id = post.get("user_id")
    return usernames.get(user_id, f"User {user_id}")


class ForumState:
    """Session-backed state of the forum client."""

    def __init__(self, client: ForumClient, store: MemorySessionStore | None = None) -> None:
        self.client = client
        self.store = store if store is not None else MemorySessionStore()
        _, token = load_user(self.store)
        self.client.access_token = token

    @property
    def current_user(self) -> dict[str, Any] | None:
        user, _ = load_user(self.store)
        return user

    @property
    def is_logged_in(self) -> bool:
        return self.current_user is not None

    @property
    def is_admin(self) -> bool:
        user = self.current_user
        return user is not None and user.get("role") == "admin"

    def _require_user(self) -> dict[str, Any]:
        user = self.current_user
        if user is None:
            raise NotLoggedInError("You must be logged in to do that")
        return user

    def login(self, username: str, password: str) -> dict[str, Any]:
        """Log in and store the user in the session. Raises ForumApiError on bad credentials."""
        data = self.client.login_user(username, password)
        user = data["user"]
        save_user(self.store, user, data.get("access_token"))
        logger.info("Logged in as user_id=%s", user.get("user_id"))
        return user

    def logout(self) -> None:
        self.store.clear()
        self.client.access_token = None

    def register(self, username: str, password: str, role: str = "member") -> dict[str, Any]:
        """Create an account. Any existing session is cleared first; the new user still has to log in."""
        self.logout()
        return self.client.create_user(username, password, role)

    def load_feed(self) -> list[FeedThread]:
        """Threads newest first, each with its replies oldest first."""
        usernames = {u["user_id"]: u["username"] for u in self.client.fetch_all_users()}
        replies_by_thread: dict[int, list[FeedReply]] = defaultdict(list)
        for r in self.client.fetch_all_replies():
            replies_by_thread[r["thread_id"]].append(
                FeedReply(
                    reply_id=r["reply_id"],
                    author=display_author(r, usernames),
                    content=r["content"],
                    status=r["status"],
                )
            )
        threads = sorted(
            self.client.fetch_all_threads(), key=lambda t: t["thread_id"], reverse=True
        )
        return [
            FeedThread(
                thread_id=t["thread_id"],
                title=t["title"],
                content=t["content"],
                author=display_author(t, usernames),
                status=t["status"],
                replies=sorted(replies_by_thread.get(t["thread_id"], []), key=lambda r: r.reply_id),
            )
            for t in threads
        ]

    def create_thread(self, title: str, content: str, anonymous: bool = False) -> dict[str, Any]:
        user = self._require_user()
        status = STATUS_ANONYMOUS if anonymous else STATUS_ACTIVE
        return self.client.create_thread(title, content, user["user_id"], status)

    def reply(self, thread_id: int, content: str, anonymous: bool = False) -> dict[str, Any]:
        """Post a reply; only admins may reply anonymously."""
        user = self._require_user()
        if anonymous and not self.is_admin:
            raise AdminRequiredError("Only admins can reply anonymously")
        status = STATUS_ANONYMOUS if anonymous else STATUS_ACTIVE
        return self.client.create_reply(content, thread_id, user["user_id"], status)

    def mark_correct(self, reply_id: int) -> dict[str, Any]:
        self._require_user()
        if not self.is_admin:
            raise AdminRequiredError("Only admins can mark a reply as correct")
        return self.client.update_reply_status(reply_id, STATUS_CORRECT)

    def resolve_route(self, path: str) -> str:
        """Route guard: login and register are open, home needs a session, anything else goes to login."""
        if path in PUBLIC_ROUTES:
            return path
        if path == HOME_ROUTE:
            return HOME_ROUTE if self.is_logged_in else LOGIN_ROUTE
        return LOGIN_ROUTE
