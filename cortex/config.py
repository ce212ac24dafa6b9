from __future__ import annotations

import os
from dataclasses import dataclass

from cortex.constants import ANTHROPIC_API_URL, DEFAULT_MAX_TOKENS, DEFAULT_MODEL, DEFAULT_TIMEOUT

_TRUTHY = {"1", "true", "yes", "on"}


class ConfigError(RuntimeError):
    """Raised when required configuration is missing."""


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUTHY


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class Settings:
    api_key: str | None
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    api_url: str = ANTHROPIC_API_URL
    timeout: float = DEFAULT_TIMEOUT
    debug: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the environment.

        - ANTHROPIC_API_KEY: required to talk to the API.
        - CORTEX_MODEL / CORTEX_MAX_TOKENS / CORTEX_API_URL / CORTEX_TIMEOUT
        - CORTEX_DEBUG=1 echoes requests and responses to stderr.
        """

        return cls(
            api_key=os.getenv("ANTHROPIC_API_KEY") or None,
            model=os.getenv("CORTEX_MODEL") or DEFAULT_MODEL,
            max_tokens=_env_int("CORTEX_MAX_TOKENS", DEFAULT_MAX_TOKENS),
            api_url=(os.getenv("CORTEX_API_URL") or ANTHROPIC_API_URL).rstrip("/"),
            timeout=_env_float("CORTEX_TIMEOUT", DEFAULT_TIMEOUT),
            debug=_env_flag("CORTEX_DEBUG"),
        )

    def require_api_key(self) -> str:
        if not self.api_key:
            raise ConfigError("ANTHROPIC_API_KEY must be set")
        return self.api_key
