"""Unit tests for settings validation, duration parsing and the access-token cookie policy."""

import unittest
from datetime import timedelta

from fastapi import Response
from pydantic import ValidationError

from app.core.config import Settings, parse_duration
from app.core.cookies import clear_access_cookie, cookie_policy_from_settings, set_access_cookie


def _settings(**overrides: object) -> Settings:
    base = {"DATABASE_URL": "sqlite://", "JWT_SECRET": "s3cret"}
    base.update(overrides)
    return Settings(_env_file=None, **base)


class TestParseDuration(unittest.TestCase):
    def test_units(self) -> None:
        self.assertEqual(parse_duration("15m"), timedelta(minutes=15))
        self.assertEqual(parse_duration("7d"), timedelta(days=7))
        self.assertEqual(parse_duration("1h"), timedelta(hours=1))
        self.assertEqual(parse_duration("30s"), timedelta(seconds=30))
        self.assertEqual(parse_duration("45"), timedelta(seconds=45))
        self.assertEqual(parse_duration(90), timedelta(seconds=90))

    def test_invalid(self) -> None:
        for value in ("", "fifteen", "15x", "-5m", "1.5h"):
            with self.subTest(value=value), self.assertRaises(ValueError):
                parse_duration(value)


class TestSettings(unittest.TestCase):
    def test_expiry_strings_parsed_once_into_timedelta(self) -> None:
        s = _settings(ACCESS_TOKEN_EXPIRY="10m", REFRESH_TOKEN_EXPIRY="14d")
        self.assertEqual(s.ACCESS_TOKEN_EXPIRY, timedelta(minutes=10))
        self.assertEqual(s.REFRESH_TOKEN_EXPIRY, timedelta(days=14))

    def test_rejects_bad_values(self) -> None:
        bad = [
            {"DATABASE_URL": "mysql://localhost/db"},
            {"JWT_SECRET": "  "},
            {"ACCESS_TOKEN_EXPIRY": "soon"},
            {"ACCESS_TOKEN_EXPIRY": "0m"},
            {"BCRYPT_ROUNDS": 2},
            {"FRONTEND_URL": "ftp://example.com"},
            {"REDIS_URL": "http://cache"},
            {"APP_ENV": "staging"},
        ]
        for overrides in bad:
            with self.subTest(overrides=overrides), self.assertRaises(ValidationError):
                _settings(**overrides)

    def test_cors_origins_from_comma_string(self) -> None:
        s = _settings(CORS_ORIGINS="https://a.example.com, https://b.example.com")
        self.assertEqual(s.CORS_ORIGINS, ["https://a.example.com", "https://b.example.com"])

    def test_smtp_configured_needs_user_and_password(self) -> None:
        self.assertFalse(_settings(SMTP_USER=None, SMTP_PASS=None).smtp_configured)
        self.assertTrue(_settings(SMTP_USER="mailer", SMTP_PASS="pw").smtp_configured)

    def test_blank_redis_url_means_disabled(self) -> None:
        self.assertIsNone(_settings(REDIS_URL="").REDIS_URL)


class TestCookiePolicy(unittest.TestCase):
    def test_dev_policy_is_relaxed(self) -> None:
        policy = cookie_policy_from_settings(_settings(APP_ENV="dev", COOKIE_DOMAIN=".example.com"))
        self.assertTrue(policy.httponly)
        self.assertFalse(policy.secure)
        self.assertEqual(policy.samesite, "lax")
        self.assertIsNone(policy.domain)
        self.assertEqual(policy.max_age, 15 * 60)

    def test_prod_policy_is_cross_subdomain(self) -> None:
        policy = cookie_policy_from_settings(_settings(APP_ENV="prod", COOKIE_DOMAIN=".example.com"))
        self.assertTrue(policy.secure)
        self.assertEqual(policy.samesite, "none")
        self.assertEqual(policy.domain, ".example.com")

    def test_set_and_clear_share_attributes(self) -> None:
        policy = cookie_policy_from_settings(_settings(APP_ENV="prod", COOKIE_DOMAIN=".example.com"))
        set_resp, clear_resp = Response(), Response()
        set_access_cookie(set_resp, "token-value", policy)
        clear_access_cookie(clear_resp, policy)

        def attrs(header: str) -> set[str]:
            parts = [p.strip().lower() for p in header.split(";")[1:]]
            return {p for p in parts if not p.startswith(("max-age", "expires"))}

        set_header = set_resp.headers["set-cookie"]
        clear_header = clear_resp.headers["set-cookie"]
        self.assertTrue(set_header.startswith("accessToken=token-value"))
        self.assertTrue(clear_header.startswith("accessToken="))
        self.assertEqual(attrs(set_header), attrs(clear_header))
        self.assertIn("domain=.example.com", attrs(set_header))
        self.assertIn("httponly", attrs(set_header))
