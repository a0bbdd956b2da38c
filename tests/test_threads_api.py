"""API tests for /api/threads against an in-memory database."""

import unittest
from unittest.mock import patch

from helpers import ApiTestCase

from forum.services.persistence import PersistenceError


class TestCreateThread(ApiTestCase):

    def setUp(self) -> None:
        super().setUp()
        self.user = self.create_user()
        self.new_thread = {
            "title": "Test Thread",
            "content": "This is a test thread.",
            "user_id": self.user["user_id"],
            "status": "active",
        }

    def test_creates_thread(self) -> None:
        resp = self.client.post("/api/threads", json=self.new_thread)
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertIn("thread_id", body)
        for key in ("title", "content", "user_id", "status"):
            self.assertEqual(body[key], self.new_thread[key])

    def test_missing_fields_return_combined_message(self) -> None:
        for field, empty in (("title", ""), ("content", ""), ("user_id", None), ("status", "")):
            with self.subTest(field=field):
                resp = self.client.post("/api/threads", json={**self.new_thread, field: empty})
                self.assertEqual(resp.status_code, 400)
                self.assertEqual(
                    resp.json(),
                    {"error": "Title, content, user_id, and status are required"},
                )

    def test_short_title(self) -> None:
        resp = self.client.post(
            "/api/threads",
            json={
                "title": "Short",
                "content": "This is a new thread",
                "user_id": 1,
                "status": "open",
            },
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Title must be at least 10 characters long"})

    def test_length_bounds(self) -> None:
        cases = [
            ({"title": "t" * 101}, "Title cannot be longer than 100 characters"),
            ({"content": "c" * 19}, "Content must be at least 20 characters long"),
            ({"content": "c" * 2001}, "Content cannot be longer than 2000 characters"),
        ]
        for override, message in cases:
            with self.subTest(message=message):
                resp = self.client.post("/api/threads", json={**self.new_thread, **override})
                self.assertEqual(resp.status_code, 400)
                self.assertEqual(resp.json()["error"], message)

    def test_unknown_user(self) -> None:
        resp = self.client.post("/api/threads", json={**self.new_thread, "user_id": 4242})
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"error": "User not found"})

    def test_no_body_reports_required_fields(self) -> None:
        resp = self.client.post("/api/threads")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Title, content, user_id, and status are required"})

    def test_out_of_range_user_id(self) -> None:
        resp = self.client.post("/api/threads", json={**self.new_thread, "user_id": 10**12})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Invalid user ID"})

    def test_wrong_type_is_bad_request(self) -> None:
        resp = self.client.post("/api/threads", json={**self.new_thread, "user_id": "abc"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Invalid request body"})


class TestReadThreads(ApiTestCase):

    def test_get_by_id(self) -> None:
        user = self.create_user()
        thread = self.create_thread(user["user_id"])
        resp = self.client.get(f"/api/threads/{thread['thread_id']}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["title"], thread["title"])

    def test_not_found(self) -> None:
        resp = self.client.get("/api/threads/999")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"error": "Thread not found"})

    def test_invalid_id(self) -> None:
        resp = self.client.get("/api/threads/abc")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Invalid thread ID"})

    def test_list_in_id_order(self) -> None:
        user = self.create_user()
        first = self.create_thread(user["user_id"])
        second = self.create_thread(user["user_id"], title="Second thread title")
        resp = self.client.get("/api/threads")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            [t["thread_id"] for t in resp.json()],
            [first["thread_id"], second["thread_id"]],
        )

    def test_list_database_failure(self) -> None:
        with patch(
            "forum.services.threads.list_threads",
            side_effect=PersistenceError("list threads: database error"),
        ):
            resp = self.client.get("/api/threads")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "Failed to retrieve threads"})


class TestUpdateThread(ApiTestCase):

    def setUp(self) -> None:
        super().setUp()
        self.user = self.create_user()
        self.thread = self.create_thread(self.user["user_id"])

    def test_updates_thread(self) -> None:
        resp = self.client.put(
            f"/api/threads/{self.thread['thread_id']}",
            json={
                "title": "Updated thread title",
                "content": "Updated content for this thread.",
                "status": "closed",
            },
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["title"], "Updated thread title")
        self.assertEqual(body["status"], "closed")
        self.assertEqual(body["user_id"], self.user["user_id"])

    def test_requires_all_fields(self) -> None:
        resp = self.client.put(
            f"/api/threads/{self.thread['thread_id']}",
            json={"title": "Updated thread title"},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Title, content, and status are required"})

    def test_not_found(self) -> None:
        resp = self.client.put(
            "/api/threads/999",
            json={
                "title": "Updated thread title",
                "content": "Updated content for this thread.",
                "status": "active",
            },
        )
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"error": "Thread not found"})


class TestDeleteThread(ApiTestCase):

    def test_deletes_thread_and_replies(self) -> None:
        user = self.create_user()
        thread = self.create_thread(user["user_id"])
        reply = self.create_reply(thread["thread_id"], user["user_id"])

        resp = self.client.delete(f"/api/threads/{thread['thread_id']}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"message": "Thread deleted successfully"})
        self.assertEqual(self.client.get(f"/api/threads/{thread['thread_id']}").status_code, 404)
        self.assertEqual(self.client.get(f"/api/replies/{reply['reply_id']}").status_code, 404)

    def test_not_found(self) -> None:
        resp = self.client.delete("/api/threads/999")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"error": "Thread not found"})


if __name__ == "__main__":
    unittest.main()
