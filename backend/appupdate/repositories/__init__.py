"""Repository package exposing persistence-layer access for all models."""

from __future__ import annotations

from appupdate.repositories.account import AccountRepository
from appupdate.repositories.app_channel import AppChannelRepository
from appupdate.repositories.base import (
    BaseRepository,
    Page,
    Pagination,
    paginate_select,
)

__all__ = [
    "BaseRepository",
    "Page",
    "Pagination",
    "paginate_select",
    "AccountRepository",
    "AppChannelRepository",
]
