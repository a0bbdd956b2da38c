"""Client-side session storage: an opaque key-value store holding the logged-in user."""

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

USER_KEY = "user"


class MemorySessionStore:
    """In-memory key-value store of JSON strings (lives as long as the client process)."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()


class FileSessionStore(MemorySessionStore):
    """Session store persisted as one JSON object in a file, so a login survives restarts."""

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self.path = Path(path)
        if self.path.exists():
            try:
                self._items = json.loads(self.path.read_text(encoding="utf-8"))
            except (OSError, ValueError):
                logger.warning("Ignoring unreadable session file %s", self.path)
                self._items = {}

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._items), encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        super().set_item(key, value)
        self._flush()

    def remove_item(self, key: str) -> None:
        super().remove_item(key)
        self._flush()

    def clear(self) -> None:
        super().clear()
        self._flush()


def save_user(store: MemorySessionStore, user: dict[str, Any], access_token: str | None = None) -> None:
    """Serialize the logged-in user (and its token) into the single session entry."""
    store.set_item(USER_KEY, json.dumps({"user": user, "access_token": access_token}))


def load_user(store: MemorySessionStore) -> tuple[dict[str, Any] | None, str | None]:
    """Return (user, access_token) from the session, or (None, None) when logged out."""
    raw = store.get_item(USER_KEY)
    if not raw:
        return None, None
    try:
        entry = json.loads(raw)
    except ValueError:
        logger.warning("Discarding malformed session entry")
        store.remove_item(USER_KEY)
        return None, None
    return entry.get("user"), entry.get("access_token")
