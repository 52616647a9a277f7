"""Transaction boundary shared by services and the binding store."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from appupdate.repositories import AccountRepository, AppChannelRepository


class UnitOfWork(ABC):
    """
    One transaction plus the repositories that run inside it.

    Use as a context manager: a read-write implementation commits when the
    block exits cleanly and rolls back when it raises.
    """

    accounts: AccountRepository
    channels: AppChannelRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...

    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...
