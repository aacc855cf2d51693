"""Access-token cookie attributes, shared by set and clear so browsers actually drop the cookie."""

from dataclasses import dataclass
from typing import Literal

from starlette.responses import Response

from app.core.config import Settings


@dataclass(frozen=True)
class CookiePolicy:
    name: str
    httponly: bool
    secure: bool
    samesite: Literal["lax", "strict", "none"]
    domain: str | None
    max_age: int
    path: str = "/"


def cookie_policy_from_settings(settings: Settings) -> CookiePolicy:
    """Strict cross-subdomain cookie in prod; relaxed (plain HTTP, lax, host-only) elsewhere."""
    max_age = int(settings.ACCESS_TOKEN_EXPIRY.total_seconds())
    if settings.is_production:
        return CookiePolicy(
            name=settings.COOKIE_NAME,
            httponly=True,
            secure=True,
            samesite="none",
            domain=settings.COOKIE_DOMAIN,
            max_age=max_age,
        )
    return CookiePolicy(
        name=settings.COOKIE_NAME,
        httponly=True,
        secure=False,
        samesite="lax",
        domain=None,
        max_age=max_age,
    )


def set_access_cookie(response: Response, token: str, policy: CookiePolicy) -> None:
    response.set_cookie(
        key=policy.name,
        value=token,
        max_age=policy.max_age,
        path=policy.path,
        domain=policy.domain,
        secure=policy.secure,
        httponly=policy.httponly,
        samesite=policy.samesite,
    )


def clear_access_cookie(response: Response, policy: CookiePolicy) -> None:
    response.delete_cookie(
        key=policy.name,
        path=policy.path,
        domain=policy.domain,
        secure=policy.secure,
        httponly=policy.httponly,
        samesite=policy.samesite,
    )
