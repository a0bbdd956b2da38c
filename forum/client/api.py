"""HTTP client for the forum REST API: one method per endpoint."""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_API_PREFIX = "/api"
DEFAULT_TIMEOUT_SEC = 10.0


class ForumApiError(Exception):
    """Raised when the API answers with a non-2xx status or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:500] if resp.text else resp.reason_phrase
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return resp.reason_phrase or "An unexpected error occurred"


class ForumClient:
    """
    Synchronous client for /api/users, /api/threads and /api/replies.

    Pass http_client to reuse an existing httpx.Client (for example a
    FastAPI TestClient); otherwise one is created for base_url.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        api_prefix: str = DEFAULT_API_PREFIX,
        timeout: float = DEFAULT_TIMEOUT_SEC,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(base_url=base_url, timeout=timeout)
        self._prefix = api_prefix.rstrip("/")
        self.access_token: str | None = None

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> ForumClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, method: str, path: str, json: dict[str, Any] | None = None) -> Any:
        headers = {}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        url = f"{self._prefix}{path}"
        try:
            resp = self._http.request(method, url, json=json, headers=headers)
        except httpx.HTTPError as e:
            logger.error("Request %s %s failed: %s", method, url, e)
            raise ForumApiError(f"Forum API unreachable: {e!s}") from e
        if resp.status_code >= 400:
            message = _error_message(resp)
            logger.debug("%s %s -> %s %s", method, url, resp.status_code, message)
            raise ForumApiError(message, resp.status_code)
        return resp.json()

    # Users

    def create_user(self, username: str, password: str, role: str = "member") -> dict[str, Any]:
        return self._request(
            "POST", "/users", {"username": username, "password": password, "role": role}
        )

    def login_user(self, username: str, password: str) -> dict[str, Any]:
        """Log in and remember the access token for later requests."""
        data = self._request("POST", "/users/login", {"username": username, "password": password})
        self.access_token = data.get("access_token")
        return data

    def get_user_by_id(self, user_id: int) -> dict[str, Any]:
        return self._request("GET", f"/users/{user_id}")

    def fetch_all_users(self) -> list[dict[str, Any]]:
        return self._request("GET", "/users")

    def update_user(self, user_id: int, updates: dict[str, Any]) -> dict[str, Any]:
        return self._request("PUT", f"/users/{user_id}", updates)

    def delete_user(self, user_id: int) -> dict[str, Any]:
        return self._request("DELETE", f"/users/{user_id}")

    # Threads

    def create_thread(
        self, title: str, content: str, user_id: int, status: str = "active"
    ) -> dict[str, Any]:
        return self._request(
            "POST",
            "/threads",
            {"title": title, "content": content, "user_id": user_id, "status": status},
        )

    def get_thread_by_id(self, thread_id: int) -> dict[str, Any]:
        return self._request("GET", f"/threads/{thread_id}")

    def fetch_all_threads(self) -> list[dict[str, Any]]:
        return self._request("GET", "/threads")

    def update_thread(self, thread_id: int, updates: dict[str, Any]) -> dict[str, Any]:
        return self._request("PUT", f"/threads/{thread_id}", updates)

    def delete_thread(self, thread_id: int) -> dict[str, Any]:
        return self._request("DELETE", f"/threads/{thread_id}")

    # Replies

    def create_reply(
        self, content: str, thread_id: int, user_id: int, status: str = "active"
    ) -> dict[str, Any]:
        return self._request(
            "POST",
            "/replies",
            {"content": content, "thread_id": thread_id, "user_id": user_id, "status": status},
        )

    def get_reply_by_id(self, reply_id: int) -> dict[str, Any]:
        return self._request("GET", f"/replies/{reply_id}")

    def fetch_replies_for_thread(self, thread_id: int) -> list[dict[str, Any]]:
        return self._request("GET", f"/replies/thread/{thread_id}")

    def fetch_all_replies(self) -> list[dict[str, Any]]:
        return self._request("GET", "/replies")

    def update_reply(self, reply_id: int, updates: dict[str, Any]) -> dict[str, Any]:
        return self._request("PUT", f"/replies/{reply_id}", updates)

    def update_reply_status(self, reply_id: int, status: str) -> dict[str, Any]:
        return self.update_reply(reply_id, {"status": status})

    def delete_reply(self, reply_id: int) -> dict[str, Any]:
        return self._request("DELETE", f"/replies/{reply_id}")

    def health(self) -> str:
        """GET /health (outside the API prefix); returns the plain-text body."""
        try:
            resp = self._http.get("/health")
        except httpx.HTTPError as e:
            raise ForumApiError(f"Forum API unreachable: {e!s}") from e
        if resp.status_code != 200:
            raise ForumApiError(_error_message(resp), resp.status_code)
        return resp.text
