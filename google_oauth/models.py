"""Data models for the Google OAuth session"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds"""
    return int(time.time() * 1000)


@dataclass
class CredentialBundle:
    """Credentials persisted after a successful code exchange

    Attributes:
        access_token: Bearer token for the converter API
        expires_at: Absolute expiry in epoch milliseconds, computed client-side
        refresh_token: Refresh token, when the provider issued one
        user_info: Profile payload returned alongside the tokens
    """
    access_token: str
    expires_at: int
    refresh_token: Optional[str] = None
    user_info: Optional[Any] = None

    def is_valid(self, at_ms: int) -> bool:
        """Check whether the bundle authenticates a request made at ``at_ms``"""
        return bool(self.access_token) and bool(self.expires_at) and at_ms < self.expires_at


@dataclass
class CookieOptions:
    """Attributes applied to every persisted credential entry

    Attributes:
        secure: Only send the entry over HTTPS
        same_site: SameSite policy ("lax", "strict" or "none")
        expires_days: Retention window of the entry, independent of the session TTL
    """
    secure: bool = False
    same_site: str = "lax"
    expires_days: int = 7

    @classmethod
    def for_environment(cls, app_env: str, same_site: str = "lax", expires_days: int = 7) -> "CookieOptions":
        """Default options: secure-flagged outside development"""
        return cls(
            secure=app_env.lower() == "production",
            same_site=same_site,
            expires_days=expires_days,
        )


@dataclass
class View:
    """What the callback landing page shows

    Attributes:
        kind: "processing" or "error"
        title: Heading text
        message: Body text
        actions: Manual actions offered, as label -> route
    """
    kind: str
    title: str
    message: str
    actions: Dict[str, str] = field(default_factory=dict)
