"""Read model answering whether the user is currently authenticated"""

import datetime
from typing import Any, Callable, Dict

from .credential_store import CredentialStore
from .models import now_ms


class SessionState:
    """Derives session validity from the credential store and the clock

    Nothing here mutates the store or touches the network, so it is safe to
    call on every redraw.
    """

    def __init__(self, store: CredentialStore, clock: Callable[[], int] = now_ms):
        self.store = store
        self._clock = clock

    def is_authenticated(self) -> bool:
        """Check for a stored access token whose expiry is still ahead"""
        bundle = self.store.read()
        if bundle is None:
            return False
        return bundle.is_valid(self._clock())

    def get_status(self) -> Dict[str, Any]:
        """Get session status without exposing secrets

        Returns:
            Dictionary with has_tokens, is_expired, expires_at (ISO 8601),
            time_until_expiry, has_refresh_token and user
        """
        bundle = self.store.read()
        if bundle is None:
            return {
                "has_tokens": False,
                "is_expired": True,
                "expires_at": None,
                "time_until_expiry": "No tokens",
                "has_refresh_token": False,
                "user": None,
            }

        current = self._clock()
        expires_dt = datetime.datetime.fromtimestamp(bundle.expires_at / 1000, datetime.timezone.utc)
        remaining = (bundle.expires_at - current) // 1000

        if bundle.expires_at <= current:
            elapsed = (current - bundle.expires_at) // 1000
            hours, minutes = elapsed // 3600, (elapsed % 3600) // 60
            time_str = f"{hours}h {minutes}m ago" if hours > 0 else f"{minutes}m ago"
        else:
            hours, minutes = remaining // 3600, (remaining % 3600) // 60
            time_str = f"{hours}h {minutes}m" if hours > 0 else f"{minutes}m"

        user = bundle.user_info if isinstance(bundle.user_info, dict) else {}
        return {
            "has_tokens": True,
            "is_expired": not bundle.is_valid(current),
            "expires_at": expires_dt.isoformat(),
            "time_until_expiry": time_str,
            "has_refresh_token": bool(bundle.refresh_token),
            "user": user.get("email") or user.get("name"),
        }
