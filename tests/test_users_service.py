"""Unit tests for app.services.users: registration, welcome email, cached profile lookup."""

import unittest
from unittest.mock import MagicMock

from app.core.security import verify_password
from app.services import users
from app.services.cache import NullProfileCache, profile_cache_key
from app.services.errors import ConflictError, NotFoundError, ServiceError
from tests.fakes import DictProfileCache, InMemoryCredentialStore, RecordingMailer


class TestRegisterUser(unittest.TestCase):
    def setUp(self) -> None:
        self.store = InMemoryCredentialStore()

    def test_creates_user_role_with_bcrypt_hash(self) -> None:
        user = users.register_user(
            self.store, name="alice", email="alice@example.com", password="secret123"
        )
        self.assertEqual(user.role, "USER")
        self.assertNotEqual(user.password_hash, "secret123")
        self.assertTrue(verify_password("secret123", user.password_hash))

    def test_duplicate_email_conflicts(self) -> None:
        users.register_user(self.store, name="alice", email="alice@example.com", password="secret123")
        with self.assertRaises(ConflictError):
            users.register_user(self.store, name="alice2", email="alice@example.com", password="other123")


class TestWelcomeEmail(unittest.TestCase):
    def test_sends_welcome_message(self) -> None:
        store = InMemoryCredentialStore()
        user = store.add_user(email="bob@example.com", password_hash="x", name="Bob")
        mailer = RecordingMailer()
        users.send_welcome_email(mailer, user)
        self.assertEqual(len(mailer.sent), 1)
        self.assertEqual(mailer.sent[0].to, "bob@example.com")
        self.assertIn("Bob", mailer.sent[0].html)

    def test_delivery_failure_is_only_logged(self) -> None:
        store = InMemoryCredentialStore()
        user = store.add_user(email="bob@example.com", password_hash="x", name="Bob")
        with self.assertLogs("app.services.users", level="ERROR"):
            users.send_welcome_email(RecordingMailer(fail=True), user)


class TestGetProfile(unittest.TestCase):
    def setUp(self) -> None:
        self.store = InMemoryCredentialStore()
        self.user = self.store.add_user(email="alice@example.com", password_hash="hash", name="alice")

    def test_miss_then_hit(self) -> None:
        cache = DictProfileCache()
        data, hit = users.get_profile(self.store, cache, self.user.id, 300)
        self.assertFalse(hit)
        self.assertEqual(data["email"], "alice@example.com")
        self.assertNotIn("password_hash", data)
        self.assertEqual(cache.ttls[profile_cache_key(self.user.id)], 300)

        again, hit = users.get_profile(self.store, cache, self.user.id, 300)
        self.assertTrue(hit)
        self.assertEqual(again, data)

    def test_null_cache_always_reads_store(self) -> None:
        _, hit = users.get_profile(self.store, NullProfileCache(), self.user.id, 300)
        self.assertFalse(hit)
        _, hit = users.get_profile(self.store, NullProfileCache(), self.user.id, 300)
        self.assertFalse(hit)

    def test_missing_user(self) -> None:
        with self.assertRaises(NotFoundError):
            users.get_profile(self.store, DictProfileCache(), "missing", 300)


class TestAdminOperations(unittest.TestCase):
    """Argument checks that reject before touching the database."""

    def test_invalid_role_rejected(self) -> None:
        db = MagicMock()
        with self.assertRaises(ServiceError):
            users.update_user_role(db, "user-1", "SUPERUSER")
        db.commit.assert_not_called()

    def test_self_delete_rejected(self) -> None:
        db = MagicMock()
        with self.assertRaises(ServiceError):
            users.soft_delete_user(db, "admin-1", acting_user_id="admin-1")
        db.commit.assert_not_called()
