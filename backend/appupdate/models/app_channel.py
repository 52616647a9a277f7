"""Release channel owned by an account (e.g. ``stable``, ``beta``)."""

from __future__ import annotations

import uuid

from sqlalchemy import ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, validates

from appupdate.core.extensions import db

from .base import ReprMixin, SoftDeleteMixin, TimestampMixin, UUIDPKMixin


class AppChannel(UUIDPKMixin, ReprMixin, SoftDeleteMixin, TimestampMixin, db.Model):
    """Named distribution channel scoped to its owner."""

    __tablename__ = "app_channels"

    channel_name: Mapped[str] = mapped_column(String(100), nullable=False)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (Index("ix_app_channels_owner_id", "owner_id"),)

    @validates("channel_name")
    def _normalize_name(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Channel name is required.")
        return value.strip()
