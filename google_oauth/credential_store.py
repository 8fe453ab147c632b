"""Durable credential storage for the Google OAuth session

Credentials are kept as four cookie-style entries (``googleAccessToken``,
``googleRefreshToken``, ``userInfo``, ``tokenExpiry``), each carrying its own
retention expiry and security attributes. The jar lives in a single JSON file
that is replaced atomically on every write.
"""

import json
import logging
import os
import platform
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from .constants import (
    ACCESS_TOKEN_KEY,
    ENTRY_KEYS,
    REFRESH_TOKEN_KEY,
    TOKEN_EXPIRY_KEY,
    USER_INFO_KEY,
)
from .errors import StorageUnavailable
from .models import CookieOptions, CredentialBundle, now_ms


logger = logging.getLogger(__name__)

MS_PER_DAY = 24 * 60 * 60 * 1000


class CredentialStore(ABC):
    """Persistence contract for the credential bundle"""

    @abstractmethod
    def write(self, bundle: CredentialBundle, options: CookieOptions) -> None:
        """Persist a complete bundle, replacing any previous one"""

    @abstractmethod
    def read(self) -> Optional[CredentialBundle]:
        """Return the stored bundle, or None when absent or incomplete"""

    @abstractmethod
    def clear(self) -> None:
        """Remove every credential entry"""


class CookieCredentialStore(CredentialStore):
    """Cookie-jar credential store backed by a permission-restricted JSON file"""

    def __init__(
        self,
        cookie_file: Optional[str] = None,
        clock: Callable[[], int] = now_ms,
    ):
        """Initialize the store

        Args:
            cookie_file: Path to the jar file (default: settings.CREDENTIALS_FILE)
            clock: Source of the current time in epoch milliseconds
        """
        if cookie_file is None:
            from settings import CREDENTIALS_FILE
            cookie_file = CREDENTIALS_FILE

        self.cookie_path = Path(cookie_file).expanduser()
        self._clock = clock

    @property
    def cookie_file(self) -> Path:
        """Get the jar file path"""
        return self.cookie_path

    def _ensure_secure_directory(self) -> None:
        """Create the parent directory with secure permissions

        Raises:
            StorageUnavailable: If the directory cannot be created
        """
        parent_dir = self.cookie_path.parent
        if parent_dir.is_dir():
            return
        try:
            parent_dir.mkdir(parents=True, exist_ok=True)
            if platform.system() != "Windows":
                os.chmod(parent_dir, 0o700)
        except OSError as e:
            raise StorageUnavailable(f"Cannot create credential directory {parent_dir}: {e}") from e

    def _load_jar(self) -> Dict[str, Dict[str, Any]]:
        if not self.cookie_path.exists():
            return {}
        data = json.loads(self.cookie_path.read_text())
        if not isinstance(data, dict):
            raise ValueError("Credential jar is not a JSON object")
        return data

    def _live_value(self, jar: Dict[str, Dict[str, Any]], name: str) -> Optional[str]:
        """Get an entry's value unless it is missing or past its retention window"""
        entry = jar.get(name)
        if not isinstance(entry, dict):
            return None
        expires = entry.get("expires")
        if isinstance(expires, (int, float)) and self._clock() >= expires:
            return None
        value = entry.get("value")
        return value if isinstance(value, str) and value else None

    def write(self, bundle: CredentialBundle, options: CookieOptions) -> None:
        """Persist the bundle as one atomic jar replacement

        Entries are laid out in ``ENTRY_KEYS`` order, ``tokenExpiry`` last.
        Outside a usable storage medium this is a no-op.

        Args:
            bundle: Credentials to persist
            options: Security attributes and retention window for every entry
        """
        values = {
            ACCESS_TOKEN_KEY: bundle.access_token,
            REFRESH_TOKEN_KEY: bundle.refresh_token,
            USER_INFO_KEY: json.dumps(bundle.user_info) if bundle.user_info is not None else None,
            TOKEN_EXPIRY_KEY: str(int(bundle.expires_at)),
        }
        retention = self._clock() + options.expires_days * MS_PER_DAY

        jar: Dict[str, Dict[str, Any]] = {}
        for name in ENTRY_KEYS:
            value = values[name]
            if value is None:
                continue
            jar[name] = {
                "value": value,
                "expires": retention,
                "secure": options.secure,
                "sameSite": options.same_site,
            }

        try:
            self._ensure_secure_directory()
            self._replace_jar(jar)
        except StorageUnavailable as e:
            logger.debug(f"Credential storage unavailable, skipping write: {e}")
            return

        logger.debug(f"Saved credentials to {self.cookie_path}")

    def _replace_jar(self, jar: Dict[str, Dict[str, Any]]) -> None:
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.cookie_path.parent, prefix=".cookies-", suffix=".tmp")
        except OSError as e:
            raise StorageUnavailable(f"Cannot write credential jar {self.cookie_path}: {e}") from e

        try:
            with os.fdopen(fd, "w") as fh:
                json.dump(jar, fh, indent=2)
            if platform.system() != "Windows":
                os.chmod(tmp_name, 0o600)
            os.replace(tmp_name, self.cookie_path)
        except OSError as e:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageUnavailable(f"Cannot write credential jar {self.cookie_path}: {e}") from e

    def read(self) -> Optional[CredentialBundle]:
        """Load the stored bundle

        Returns:
            The bundle, or None if absent, corrupt or missing token/expiry
        """
        try:
            jar = self._load_jar()
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable credential jar {self.cookie_path}: {e}")
            return None

        access_token = self._live_value(jar, ACCESS_TOKEN_KEY)
        raw_expiry = self._live_value(jar, TOKEN_EXPIRY_KEY)
        if not access_token or not raw_expiry:
            return None

        try:
            expires_at = int(raw_expiry)
        except ValueError:
            logger.warning(f"Ignoring malformed {TOKEN_EXPIRY_KEY} entry")
            return None

        user_info = None
        raw_user = self._live_value(jar, USER_INFO_KEY)
        if raw_user:
            try:
                user_info = json.loads(raw_user)
            except ValueError:
                logger.warning(f"Ignoring malformed {USER_INFO_KEY} entry")

        return CredentialBundle(
            access_token=access_token,
            expires_at=expires_at,
            refresh_token=self._live_value(jar, REFRESH_TOKEN_KEY),
            user_info=user_info,
        )

    def clear(self) -> None:
        """Remove every credential entry; clearing an empty store does nothing"""
        try:
            if self.cookie_path.exists():
                self.cookie_path.unlink()
                logger.info("Cleared stored credentials")
        except OSError as e:
            logger.debug(f"Credential storage unavailable, skipping clear: {e}")
