"""Repository for :class:`AppChannel` rows, always scoped to one owner."""

from __future__ import annotations

import uuid
from typing import cast

from sqlalchemy import select

from appupdate.models.app_channel import AppChannel
from appupdate.repositories.base import BaseRepository, Page, Pagination


class AppChannelRepository(BaseRepository[AppChannel]):
    model = AppChannel

    def _sortable_fields(self):
        return {
            "channel_name": AppChannel.channel_name,
            "created_at": AppChannel.created_at,
            "updated_at": AppChannel.updated_at,
        }

    def _filterable_fields(self):
        return {"owner_id": AppChannel.owner_id, "is_deleted": AppChannel.is_deleted}

    def _updatable_fields(self):
        return {"channel_name", "is_deleted"}

    def get_owned(
        self, channel_id: uuid.UUID, owner_id: uuid.UUID, *, include_deleted: bool = False
    ) -> AppChannel | None:
        """Return the channel when it belongs to ``owner_id``.

        :param channel_id: Channel primary key.
        :type channel_id: uuid.UUID
        :param owner_id: Requesting account id.
        :type owner_id: uuid.UUID
        :param include_deleted: Also match soft-deleted rows.
        :type include_deleted: bool
        :returns: Channel or ``None``.
        :rtype: AppChannel | None
        """
        stmt = select(AppChannel).where(
            AppChannel.id == channel_id, AppChannel.owner_id == owner_id
        )
        if not include_deleted:
            stmt = stmt.where(AppChannel.is_deleted.is_(False))
        return cast(AppChannel | None, self.session.execute(stmt).scalars().first())

    def name_taken(
        self, owner_id: uuid.UUID, channel_name: str, *, exclude_id: uuid.UUID | None = None
    ) -> bool:
        """Return ``True`` when the owner already has a live channel with that name."""
        stmt = select(AppChannel.id).where(
            AppChannel.owner_id == owner_id,
            AppChannel.channel_name == channel_name.strip(),
            AppChannel.is_deleted.is_(False),
        )
        if exclude_id is not None:
            stmt = stmt.where(AppChannel.id != exclude_id)
        return self.session.execute(stmt.limit(1)).first() is not None

    def list_live(self, owner_id: uuid.UUID, pagination: Pagination) -> Page[AppChannel]:
        """Paginate the owner's channels that are not soft-deleted."""
        return self.paginate(pagination, filters={"owner_id": owner_id, "is_deleted": False})
