"""Environment-backed settings lookup

Values come from the process environment, then a ``.env`` file, then the
default given at the call site. The type of the default decides how a raw
string is parsed.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

TRUE_WORDS = {"true", "1", "yes", "on"}


def _coerce(name: str, raw: str, default: Any) -> Any:
    if isinstance(default, bool):
        return raw.strip().lower() in TRUE_WORDS
    if isinstance(default, (int, float)):
        try:
            return type(default)(raw)
        except ValueError:
            logger.warning(f"Ignoring {name}={raw!r}: not a valid {type(default).__name__}, keeping {default!r}")
            return default
    return raw


class ConfigLoader:
    """Typed lookups over the environment, seeded from a ``.env`` file"""

    def __init__(self, env_path: Optional[str] = None):
        self.env_path = Path(env_path or ".env")
        # Variables already present in the environment are never overridden
        if load_dotenv(dotenv_path=self.env_path):
            logger.debug(f"Loaded settings from {self.env_path}")

    def get(self, name: str, default: Any) -> Any:
        raw = os.environ.get(name)
        if raw is not None:
            return _coerce(name, raw, default)
        if isinstance(default, str) and default.startswith("~"):
            return os.path.expanduser(default)
        return default


@lru_cache(maxsize=None)
def get_config_loader() -> ConfigLoader:
    """Process-wide loader reading ``./.env``"""
    return ConfigLoader()
