# appupdate/services/channels/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class ChannelCreateIn:
    channel_name: str


@dataclass(frozen=True, slots=True)
class ChannelRenameIn:
    channel_id: str
    channel_name: str


@dataclass(frozen=True, slots=True)
class ChannelListIn:
    """
    :param page: 1-based page number.
    :param limit: Page size.
    :param sort: Sort tokens such as ``["-created_at"]``.
    """

    page: int = 1
    limit: int = 20
    sort: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ChannelOut:
    id: str
    channel_name: str
    owner_id: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True, slots=True)
class ChannelListOut:
    """
    One page of channels.

    :param items: Channels in the page.
    :param total: Total live channels of the owner.
    :param page: Current page.
    :param limit: Page size.
    """

    items: list[ChannelOut]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.limit else 0
