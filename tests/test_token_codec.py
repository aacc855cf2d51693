"""Unit tests for app.services.token_codec: minting, verification, digests, reset tokens."""

import unittest
from datetime import datetime, timedelta, timezone

import jwt

from app.services.errors import TokenInvalidError
from app.services.token_codec import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    TokenClaims,
    TokenCodec,
    digest,
    generate_reset_token,
)
from tests.fakes import FakeClock

SECRET = "unit-test-secret"
CLAIMS = TokenClaims(id="user-1", email="alice@example.com", role="USER")


class TestMintAndVerify(unittest.TestCase):
    def setUp(self) -> None:
        self.codec = TokenCodec(SECRET)

    def test_access_token_round_trips_identity(self) -> None:
        token = self.codec.mint_access_token(CLAIMS)
        self.assertEqual(self.codec.verify(token, ACCESS_TOKEN_TYPE), CLAIMS)

    def test_two_tokens_minted_back_to_back_differ(self) -> None:
        first = self.codec.mint_refresh_token(CLAIMS)
        second = self.codec.mint_refresh_token(CLAIMS)
        self.assertNotEqual(first, second)
        self.assertNotEqual(digest(first), digest(second))

    def test_refresh_token_rejected_where_access_expected(self) -> None:
        token = self.codec.mint_refresh_token(CLAIMS)
        with self.assertRaises(TokenInvalidError):
            self.codec.verify(token, ACCESS_TOKEN_TYPE)

    def test_access_token_rejected_where_refresh_expected(self) -> None:
        token = self.codec.mint_access_token(CLAIMS)
        with self.assertRaises(TokenInvalidError):
            self.codec.verify(token, REFRESH_TOKEN_TYPE)

    def test_wrong_secret_rejected(self) -> None:
        token = TokenCodec("another-secret").mint_access_token(CLAIMS)
        with self.assertRaises(TokenInvalidError):
            self.codec.verify(token)

    def test_expired_token_rejected(self) -> None:
        past = datetime.now(timezone.utc) - timedelta(hours=1)
        stale = TokenCodec(SECRET, clock=lambda: past).mint_access_token(CLAIMS)
        with self.assertRaises(TokenInvalidError):
            self.codec.verify(stale)

    def test_garbage_and_empty_rejected(self) -> None:
        for token in ("", "not-a-jwt", "a.b.c"):
            with self.subTest(token=token), self.assertRaises(TokenInvalidError):
                self.codec.verify(token)

    def test_token_missing_identity_claims_rejected(self) -> None:
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"type": ACCESS_TOKEN_TYPE, "iat": now, "exp": now + timedelta(minutes=5)},
            SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(TokenInvalidError):
            self.codec.verify(token)

    def test_token_without_exp_rejected(self) -> None:
        token = jwt.encode(
            {"id": "user-1", "email": "a@b.c", "role": "USER", "iat": datetime.now(timezone.utc)},
            SECRET,
            algorithm="HS256",
        )
        with self.assertRaises(TokenInvalidError):
            self.codec.verify(token)

    def test_expiry_is_checked_against_the_codec_clock(self) -> None:
        clock = FakeClock(datetime(2020, 1, 1, tzinfo=timezone.utc))
        codec = TokenCodec(SECRET, access_ttl=timedelta(minutes=15), clock=clock)
        token = codec.mint_access_token(CLAIMS)
        self.assertEqual(codec.verify(token, ACCESS_TOKEN_TYPE), CLAIMS)

        clock.advance(minutes=14)
        self.assertEqual(codec.verify(token), CLAIMS)
        clock.advance(minutes=2)
        with self.assertRaises(TokenInvalidError):
            codec.verify(token)

    def test_refresh_expiry_uses_refresh_ttl(self) -> None:
        fixed = datetime(2026, 3, 1, tzinfo=timezone.utc)
        codec = TokenCodec(SECRET, refresh_ttl=timedelta(days=7), clock=lambda: fixed)
        self.assertEqual(codec.refresh_expiry(), fixed + timedelta(days=7))

    def test_empty_secret_not_allowed(self) -> None:
        with self.assertRaises(ValueError):
            TokenCodec("")


class TestDigestAndResetToken(unittest.TestCase):
    def test_digest_is_deterministic_sha256_hex(self) -> None:
        self.assertEqual(digest("abc"), digest("abc"))
        self.assertEqual(len(digest("abc")), 64)
        self.assertNotEqual(digest("abc"), digest("abd"))

    def test_reset_tokens_are_64_hex_chars_and_unique(self) -> None:
        tokens = {generate_reset_token() for _ in range(20)}
        self.assertEqual(len(tokens), 20)
        for token in tokens:
            self.assertEqual(len(token), 64)
            int(token, 16)
