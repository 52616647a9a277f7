from __future__ import annotations

import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from typing import Protocol


class CaptchaCache(Protocol):
    """
    Short-lived ``captcha_id -> answer`` storage.

    ``take`` MUST remove and return in one atomic step so that two concurrent
    validators holding the same id can never both observe the answer.
    """

    def put(self, captcha_id: str, answer: str) -> None:
        """Store ``answer`` under ``captcha_id`` with a fresh TTL."""

    def take(self, captcha_id: str) -> str | None:
        """Remove and return the answer, or ``None`` when absent or expired."""


class InMemoryCaptchaCache(CaptchaCache):
    """
    Process-local TTL cache with bounded capacity.

    When full, expired entries are evicted first, then the oldest ones.

    :param ttl_seconds: Lifetime of each entry.
    :param max_entries: Capacity before eviction kicks in.
    :param clock: Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        *,
        ttl_seconds: float = 600,
        max_entries: int = 10_000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self._ttl = float(ttl_seconds)
        self._max = int(max_entries)
        self._clock = clock
        self._entries: OrderedDict[str, tuple[str, float]] = OrderedDict()
        self._lock = threading.Lock()

    def put(self, captcha_id: str, answer: str) -> None:
        with self._lock:
            now = self._clock()
            self._entries.pop(captcha_id, None)
            if len(self._entries) >= self._max:
                self._evict(now)
            self._entries[captcha_id] = (answer, now + self._ttl)

    def take(self, captcha_id: str) -> str | None:
        with self._lock:
            entry = self._entries.pop(captcha_id, None)
        if entry is None:
            return None
        answer, expires_at = entry
        if self._clock() >= expires_at:
            return None
        return answer

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _evict(self, now: float) -> None:
        # Caller holds the lock. Insertion order == expiry order (fixed TTL).
        while self._entries:
            _, (_, expires_at) = next(iter(self._entries.items()))
            if expires_at > now:
                break
            self._entries.popitem(last=False)
        while len(self._entries) >= self._max:
            self._entries.popitem(last=False)
