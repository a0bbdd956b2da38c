"""Shared fixtures for API tests: the FastAPI app wired to an in-memory SQLite database."""

import unittest
from collections.abc import Generator
from typing import Any

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from forum.core.config import Settings, get_settings
from forum.core.database import get_db
from forum.main import app
from forum.models import Base
from forum.services import users as user_service


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class ApiTestCase(unittest.TestCase):
    """Fresh schema per test; get_db (and optionally get_settings) overridden on the app."""

    auth_enabled = False

    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        Base.metadata.create_all(self.engine)
        self.SessionTesting = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

        def override_get_db() -> Generator[Session, None, None]:
            db = self.SessionTesting()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        if self.auth_enabled:
            app.dependency_overrides[get_settings] = lambda: Settings(AUTH_ENABLED=True)
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        self.client.close()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    def create_user(
        self, username: str = "alice", password: str = "secret1", role: str = "member"
    ) -> dict[str, Any]:
        resp = self.client.post(
            "/api/users", json={"username": username, "password": password, "role": role}
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def create_thread(
        self, user_id: int, headers: dict[str, str] | None = None, **overrides: Any
    ) -> dict[str, Any]:
        body = {
            "title": "Library opening hours",
            "content": "What are the library hours during exams?",
            "user_id": user_id,
            "status": "active",
        }
        body.update(overrides)
        resp = self.client.post("/api/threads", json=body, headers=headers)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def create_reply(
        self,
        thread_id: int,
        user_id: int,
        headers: dict[str, str] | None = None,
        **overrides: Any,
    ) -> dict[str, Any]:
        body = {
            "content": "Open until midnight in June.",
            "thread_id": thread_id,
            "user_id": user_id,
            "status": "active",
        }
        body.update(overrides)
        resp = self.client.post("/api/replies", json=body, headers=headers)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def seed_user(self, username: str, password: str, role: str = "member") -> int:
        """Insert a user straight through the service layer (bypasses the admin-creation check)."""
        with self.SessionTesting() as db:
            return user_service.create_user(db, username, password, role).user_id

    def auth_headers(self, username: str, password: str) -> dict[str, str]:
        resp = self.client.post(
            "/api/users/login", json={"username": username, "password": password}
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}
