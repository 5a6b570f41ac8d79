from __future__ import annotations

import os
import threading
import time
from typing import Callable

from ats_engine.errors import AuthError

KeyLoader = Callable[[], str | None]


def _env_key() -> str | None:
    return os.getenv("OPENAI_API_KEY")


def looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


class ApiKeySource:
    """API key provider with an explicit refresh policy.

    The key is re-read from ``loader`` once ``ttl_s`` seconds have passed since the
    last read, so a rotated key is picked up without restarting the process.
    ``ttl_s=0`` re-reads on every call.
    """

    def __init__(
        self,
        loader: KeyLoader = _env_key,
        *,
        ttl_s: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._loader = loader
        self._ttl_s = max(0.0, ttl_s)
        self._clock = clock
        self._lock = threading.Lock()
        self._cached: str | None = None
        self._loaded_at: float | None = None

    @classmethod
    def static(cls, key: str) -> "ApiKeySource":
        return cls(lambda: key, ttl_s=float("inf"))

    def _expired(self) -> bool:
        if self._loaded_at is None:
            return True
        return (self._clock() - self._loaded_at) >= self._ttl_s

    def invalidate(self) -> None:
        with self._lock:
            self._loaded_at = None

    def get(self) -> str:
        with self._lock:
            if self._expired():
                raw = (self._loader() or "").strip()
                self._cached = raw or None
                self._loaded_at = self._clock()
            key = self._cached
        if not key or looks_like_placeholder(key):
            raise AuthError("Language model API key is missing or is a placeholder value.")
        return key

    def available(self) -> bool:
        try:
            self.get()
        except AuthError:
            return False
        return True
