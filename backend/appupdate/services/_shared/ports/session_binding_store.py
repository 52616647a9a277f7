from __future__ import annotations

import threading
from enum import Enum
from typing import Protocol

from appupdate.services._shared.errors import AccountNotFoundError


class TokenSlot(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"


class SessionBindingStore(Protocol):
    """
    Persisted record of the one token pair currently valid for each account.

    Every write is a single atomic statement; there is no cross-request lock.
    """

    def bind(self, account_id: str, access_token: str, refresh_token: str) -> None:
        """
        Overwrite the stored pair unconditionally (last writer wins).

        :raises AccountNotFoundError: If no account row matched.
        :raises PersistenceError: On lower-level storage failure.
        """

    def rebind(
        self, account_id: str, expected_refresh: str, access_token: str, refresh_token: str
    ) -> bool:
        """
        Compare-and-swap: replace the pair only while the stored refresh token
        still equals ``expected_refresh``.

        :returns: ``True`` when this call performed the swap.
        :raises PersistenceError: On lower-level storage failure.
        """

    def is_bound(self, account_id: str, token: str, slot: TokenSlot) -> bool:
        """Return ``True`` iff the stored value in ``slot`` equals ``token`` exactly."""

    def clear(self, account_id: str) -> None:
        """Empty both slots so no previously issued token authorizes."""


class InMemorySessionBindingStore(SessionBindingStore):
    """Dict-backed store for unit tests; accounts must be registered via ``add_account``."""

    def __init__(self) -> None:
        self._pairs: dict[str, tuple[str, str]] = {}
        self._lock = threading.Lock()

    def add_account(self, account_id: str) -> None:
        with self._lock:
            self._pairs.setdefault(str(account_id), ("", ""))

    def bind(self, account_id: str, access_token: str, refresh_token: str) -> None:
        key = str(account_id)
        with self._lock:
            if key not in self._pairs:
                raise AccountNotFoundError(key)
            self._pairs[key] = (access_token, refresh_token)

    def rebind(
        self, account_id: str, expected_refresh: str, access_token: str, refresh_token: str
    ) -> bool:
        key = str(account_id)
        with self._lock:
            current = self._pairs.get(key)
            if current is None or current[1] != expected_refresh:
                return False
            self._pairs[key] = (access_token, refresh_token)
            return True

    def is_bound(self, account_id: str, token: str, slot: TokenSlot) -> bool:
        with self._lock:
            pair = self._pairs.get(str(account_id))
        if pair is None:
            return False
        stored = pair[0] if slot is TokenSlot.ACCESS else pair[1]
        return stored != "" and stored == token

    def clear(self, account_id: str) -> None:
        with self._lock:
            if str(account_id) in self._pairs:
                self._pairs[str(account_id)] = ("", "")
