"""Client settings resolved from explicit arguments, environment, then defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_BASE_URL = "https://takhrij-backend.onrender.com"
DEFAULT_TIMEOUT = 60.0
DEFAULT_MAX_ATTEMPTS = 1

SEARCH_PATH = "/search-hadith"
COMMENTARY_PATH = "/gpt-commentary"


def _resolve_base_url(base_url: str | None) -> str:
    value = base_url or os.getenv("TAKHRIJ_BASE_URL") or DEFAULT_BASE_URL
    return value.rstrip("/")


def _resolve_timeout(timeout: float | None) -> float:
    if timeout is not None:
        value = float(timeout)
    else:
        env_timeout = os.getenv("TAKHRIJ_TIMEOUT")
        if not env_timeout:
            return DEFAULT_TIMEOUT
        try:
            value = float(env_timeout)
        except ValueError as exc:
            raise ValueError(f"Invalid TAKHRIJ_TIMEOUT value: {env_timeout!r}") from exc
    if value <= 0:
        raise ValueError(f"timeout must be positive, got {value}")
    return value


def _resolve_max_attempts(max_attempts: int | None) -> int:
    if max_attempts is not None:
        value = int(max_attempts)
    else:
        env_attempts = os.getenv("TAKHRIJ_MAX_ATTEMPTS")
        if not env_attempts:
            return DEFAULT_MAX_ATTEMPTS
        try:
            value = int(env_attempts)
        except ValueError as exc:
            raise ValueError(f"Invalid TAKHRIJ_MAX_ATTEMPTS value: {env_attempts!r}") from exc
    if value < 1:
        raise ValueError(f"max_attempts must be at least 1, got {value}")
    return value


@dataclass(frozen=True)
class ClientSettings:
    """Connection settings for the Takhrij backend."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    max_attempts: int = DEFAULT_MAX_ATTEMPTS

    @classmethod
    def from_env(
        cls,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_attempts: Optional[int] = None,
    ) -> "ClientSettings":
        return cls(
            base_url=_resolve_base_url(base_url),
            timeout=_resolve_timeout(timeout),
            max_attempts=_resolve_max_attempts(max_attempts),
        )

    @property
    def search_url(self) -> str:
        return f"{self.base_url}{SEARCH_PATH}"

    @property
    def commentary_url(self) -> str:
        return f"{self.base_url}{COMMENTARY_PATH}"


__all__ = ["ClientSettings", "DEFAULT_BASE_URL", "DEFAULT_TIMEOUT", "DEFAULT_MAX_ATTEMPTS"]
