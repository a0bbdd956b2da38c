"""Client tests: ForumClient and ForumState driven against the app through TestClient."""

import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock

import httpx
from helpers import ApiTestCase

from forum.client import (
    AdminRequiredError,
    FileSessionStore,
    ForumApiError,
    ForumClient,
    ForumState,
    MemorySessionStore,
    NotLoggedInError,
)
from forum.client.session import USER_KEY, load_user, save_user
from forum.client.state import display_author


class TestForumClient(ApiTestCase):

    def setUp(self) -> None:
        super().setUp()
        self.api = ForumClient(http_client=self.client)

    def test_crud_round_trip(self) -> None:
        user = self.api.create_user("alice", "secret1")
        thread = self.api.create_thread(
            "Library opening hours", "What are the library hours during exams?", user["user_id"]
        )
        reply = self.api.create_reply("Open until midnight.", thread["thread_id"], user["user_id"])

        self.assertEqual(self.api.get_thread_by_id(thread["thread_id"])["title"], thread["title"])
        self.assertEqual(
            [r["reply_id"] for r in self.api.fetch_replies_for_thread(thread["thread_id"])],
            [reply["reply_id"]],
        )
        updated = self.api.update_reply_status(reply["reply_id"], "correct")
        self.assertEqual(updated["status"], "correct")
        self.assertEqual(self.api.delete_thread(thread["thread_id"]), {"message": "Thread deleted successfully"})
        self.assertEqual(self.api.fetch_all_replies(), [])

    def test_error_message_is_surfaced(self) -> None:
        with self.assertRaises(ForumApiError) as ctx:
            self.api.get_user_by_id(999)
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(ctx.exception.message, "User not found")

    def test_login_keeps_token(self) -> None:
        self.api.create_user("alice", "secret1")
        data = self.api.login_user("alice", "secret1")
        self.assertEqual(self.api.access_token, data["access_token"])

    def test_health(self) -> None:
        self.assertEqual(self.api.health(), "OK")


class TestForumClientTransport(unittest.TestCase):

    def test_unreachable_server(self) -> None:
        http = MagicMock()
        http.request.side_effect = httpx.ConnectError("connection refused")
        api = ForumClient(http_client=http)
        with self.assertRaises(ForumApiError) as ctx:
            api.fetch_all_threads()
        self.assertIsNone(ctx.exception.status_code)
        self.assertIn("unreachable", ctx.exception.message)

    def test_bearer_header_sent_after_login(self) -> None:
        http = MagicMock()
        http.request.return_value = httpx.Response(200, json=[])
        api = ForumClient(http_client=http)
        api.access_token = "tok"
        api.fetch_all_users()
        _, kwargs = http.request.call_args
        self.assertEqual(kwargs["headers"], {"Authorization": "Bearer tok"})

    def test_injected_client_is_not_closed(self) -> None:
        http = MagicMock()
        with ForumClient(http_client=http):
            pass
        http.close.assert_not_called()


class TestForumState(ApiTestCase):

    def setUp(self) -> None:
        super().setUp()
        self.api = ForumClient(http_client=self.client)
        self.state = ForumState(self.api)
        self.member = self.api.create_user("alice", "secret1")
        self.admin = self.api.create_user("root", "rootpass", role="admin")

    def test_login_and_logout(self) -> None:
        self.assertFalse(self.state.is_logged_in)
        user = self.state.login("alice", "secret1")
        self.assertEqual(user["username"], "alice")
        self.assertTrue(self.state.is_logged_in)
        self.assertFalse(self.state.is_admin)
        self.assertIsNotNone(self.api.access_token)

        self.state.logout()
        self.assertIsNone(self.state.current_user)
        self.assertIsNone(self.api.access_token)

    def test_failed_login_leaves_session_empty(self) -> None:
        with self.assertRaises(ForumApiError) as ctx:
            self.state.login("alice", "wrong")
        self.assertEqual(ctx.exception.message, "Invalid credentials")
        self.assertFalse(self.state.is_logged_in)

    def test_register_clears_existing_session(self) -> None:
        self.state.login("alice", "secret1")
        created = self.state.register("bob", "secret2")
        self.assertEqual(created["username"], "bob")
        self.assertFalse(self.state.is_logged_in)

    def test_actions_need_login(self) -> None:
        with self.assertRaises(NotLoggedInError):
            self.state.create_thread("Library opening hours", "What are the library hours?")

    def test_feed_order_and_anonymous_author(self) -> None:
        self.state.login("alice", "secret1")
        older = self.state.create_thread(
            "First question here", "Where is the exam schedule posted?"
        )
        newer = self.state.create_thread(
            "Second question here", "Is the cafeteria open on Sunday?", anonymous=True
        )
        first = self.state.reply(older["thread_id"], "On the notice board.")
        second = self.state.reply(older["thread_id"], "Also on the website.")

        feed = self.state.load_feed()
        self.assertEqual([t.thread_id for t in feed], [newer["thread_id"], older["thread_id"]])
        self.assertEqual(feed[0].author, "Anonymous")
        self.assertEqual(feed[1].author, "alice")
        self.assertEqual([r.reply_id for r in feed[1].replies], [first["reply_id"], second["reply_id"]])
        self.assertEqual(feed[0].replies, [])

    def test_admin_only_actions(self) -> None:
        self.state.login("alice", "secret1")
        thread = self.state.create_thread("First question here", "Where is the exam schedule posted?")
        reply = self.state.reply(thread["thread_id"], "On the notice board.")
        with self.assertRaises(AdminRequiredError):
            self.state.reply(thread["thread_id"], "Anonymous hint here.", anonymous=True)
        with self.assertRaises(AdminRequiredError):
            self.state.mark_correct(reply["reply_id"])

        self.state.login("root", "rootpass")
        self.assertTrue(self.state.is_admin)
        marked = self.state.mark_correct(reply["reply_id"])
        self.assertEqual(marked["status"], "correct")
        anon = self.state.reply(thread["thread_id"], "Anonymous hint here.", anonymous=True)
        self.assertEqual(anon["status"], "anonymous")

        feed = self.state.load_feed()
        self.assertTrue(feed[0].replies[0].is_correct)
        self.assertEqual(feed[0].replies[1].author, "Anonymous")

    def test_resolve_route(self) -> None:
        self.assertEqual(self.state.resolve_route("/login"), "/login")
        self.assertEqual(self.state.resolve_route("/register"), "/register")
        self.assertEqual(self.state.resolve_route("/home"), "/login")
        self.assertEqual(self.state.resolve_route("/anything"), "/login")
        self.state.login("alice", "secret1")
        self.assertEqual(self.state.resolve_route("/home"), "/home")
        self.assertEqual(self.state.resolve_route("/anything"), "/login")


class TestSessionStore(unittest.TestCase):

    def test_display_author(self) -> None:
        usernames = {1: "alice"}
        self.assertEqual(display_author({"user_id": 1, "status": "active"}, usernames), "alice")
        self.assertEqual(display_author({"user_id": 1, "status": "anonymous"}, usernames), "Anonymous")
        self.assertEqual(display_author({"user_id": 7, "status": "active"}, usernames), "User 7")

    def test_malformed_entry_is_discarded(self) -> None:
        store = MemorySessionStore()
        store.set_item(USER_KEY, "{not json")
        self.assertEqual(load_user(store), (None, None))
        self.assertIsNone(store.get_item(USER_KEY))

    def test_file_store_survives_restart(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "session.json"
            save_user(FileSessionStore(path), {"user_id": 1, "username": "alice"}, "tok")

            user, token = load_user(FileSessionStore(path))
            self.assertEqual(user["username"], "alice")
            self.assertEqual(token, "tok")

            FileSessionStore(path).clear()
            self.assertEqual(json.loads(path.read_text(encoding="utf-8")), {})

    def test_state_restores_token_from_store(self) -> None:
        store = MemorySessionStore()
        save_user(store, {"user_id": 1, "username": "alice", "role": "member"}, "tok")
        api = ForumClient(http_client=MagicMock())
        state = ForumState(api, store)
        self.assertTrue(state.is_logged_in)
        self.assertEqual(api.access_token, "tok")


if __name__ == "__main__":
    unittest.main()
