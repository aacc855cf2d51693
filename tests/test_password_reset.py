"""Unit tests for app.services.password_reset: request and consume reset tokens."""

import unittest
from datetime import timedelta

from app.core.security import hash_password, verify_password
from app.services.errors import DeliveryFailureError, TokenInvalidError
from app.services.password_reset import PasswordResetService
from app.services.token_codec import digest
from tests.fakes import FakeClock, InMemoryCredentialStore, RecordingMailer

TOKEN = "a" * 64


class PasswordResetTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.store = InMemoryCredentialStore()
        self.mailer = RecordingMailer()
        self.clock = FakeClock()
        self.tokens = iter([TOKEN, "b" * 64, "c" * 64])
        self.service = PasswordResetService(
            self.store,
            self.mailer,
            frontend_url="https://portfolio.example.com",
            clock=self.clock,
            token_factory=lambda: next(self.tokens),
        )
        self.user = self.store.add_user(
            email="alice@example.com", password_hash=hash_password("secret123", rounds=4), name="alice"
        )


class TestRequestReset(PasswordResetTestCase):
    def test_stores_only_digest_and_emails_link(self) -> None:
        self.service.request_reset("alice@example.com")
        row = self.store.rows[self.user.id]
        self.assertEqual(row.reset_hash, digest(TOKEN))
        self.assertNotEqual(row.reset_hash, TOKEN)
        self.assertEqual(len(self.mailer.sent), 1)
        message = self.mailer.sent[0]
        self.assertEqual(message.to, "alice@example.com")
        self.assertIn(f"https://portfolio.example.com/reset-password?token={TOKEN}", message.html)

    def test_unknown_email_is_silent(self) -> None:
        self.service.request_reset("nobody@example.com")
        self.assertEqual(self.mailer.sent, [])

    def test_delivery_failure_clears_token(self) -> None:
        self.mailer.fail = True
        with self.assertRaises(DeliveryFailureError):
            self.service.request_reset("alice@example.com")
        row = self.store.rows[self.user.id]
        self.assertIsNone(row.reset_hash)
        self.assertIsNone(row.reset_expiry)

    def test_new_request_supersedes_old_token(self) -> None:
        self.service.request_reset("alice@example.com")
        self.service.request_reset("alice@example.com")
        with self.assertRaises(TokenInvalidError):
            self.service.reset_password(TOKEN, "newpass123")
        self.service.reset_password("b" * 64, "newpass123")


class TestResetPassword(PasswordResetTestCase):
    def test_reset_sets_password_and_is_single_use(self) -> None:
        self.service.request_reset("alice@example.com")
        self.service.reset_password(TOKEN, "newpass123")
        record = self.store.get_by_id(self.user.id)
        self.assertTrue(verify_password("newpass123", record.password_hash))
        self.assertFalse(verify_password("secret123", record.password_hash))
        with self.assertRaises(TokenInvalidError):
            self.service.reset_password(TOKEN, "another123")

    def test_expired_token_rejected(self) -> None:
        self.service.request_reset("alice@example.com")
        self.clock.advance(hours=1, seconds=1)
        with self.assertRaises(TokenInvalidError):
            self.service.reset_password(TOKEN, "newpass123")
        record = self.store.get_by_id(self.user.id)
        self.assertTrue(verify_password("secret123", record.password_hash))

    def test_unknown_token_rejected(self) -> None:
        with self.assertRaises(TokenInvalidError):
            self.service.reset_password("f" * 64, "newpass123")

    def test_reset_revokes_refresh_session(self) -> None:
        self.store.store_refresh_token(self.user.id, "refresh-digest", self.clock() + timedelta(days=1))
        self.service.request_reset("alice@example.com")
        self.service.reset_password(TOKEN, "newpass123")
        self.assertIsNone(self.store.rows[self.user.id].refresh_hash)
