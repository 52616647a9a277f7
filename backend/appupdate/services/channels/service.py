# appupdate/services/channels/service.py
from __future__ import annotations

import logging
import uuid

from appupdate.models.app_channel import AppChannel
from appupdate.services._shared.base import BaseService, ServiceContext
from appupdate.services._shared.errors import NotFoundError, ServiceError, UnauthorizedError
from appupdate.services.channels.dto import (
    ChannelCreateIn,
    ChannelListIn,
    ChannelListOut,
    ChannelOut,
    ChannelRenameIn,
)

log = logging.getLogger(__name__)

CHANNEL_NAME_MAX_LENGTH = 100


def _to_out(channel: AppChannel) -> ChannelOut:
    return ChannelOut(
        id=str(channel.id),
        channel_name=channel.channel_name,
        owner_id=str(channel.owner_id),
        created_at=channel.created_at,
        updated_at=channel.updated_at,
    )


def _parse_id(raw: str) -> uuid.UUID:
    try:
        return uuid.UUID(str(raw))
    except ValueError as exc:
        raise NotFoundError("AppChannel", raw) from exc


class ChannelService(BaseService):
    """
    Owner-scoped CRUD for release channels.

    Every operation acts on behalf of ``ctx.actor_id``; channels of other
    accounts are reported as not found.
    """

    def __init__(self, *, ctx: ServiceContext) -> None:
        super().__init__(ctx=ctx)

    def _owner(self) -> uuid.UUID:
        if not self.ctx.actor_id:
            raise UnauthorizedError("Authentication required")
        return uuid.UUID(str(self.ctx.actor_id))

    @staticmethod
    def _clean_name(raw: str) -> str:
        name = (raw or "").strip()
        if not name:
            raise ServiceError("Channel name cannot be empty")
        if len(name) > CHANNEL_NAME_MAX_LENGTH:
            raise ServiceError(f"Channel name must be at most {CHANNEL_NAME_MAX_LENGTH} characters")
        return name

    def create(self, dto: ChannelCreateIn) -> ChannelOut:
        """
        Create a channel for the current account.

        :raises ServiceError: Blank name or a live channel with the same name.
        """
        owner = self._owner()
        name = self._clean_name(dto.channel_name)
        with self.rw_uow() as uow:
            if uow.channels.name_taken(owner, name):
                raise ServiceError(f"Channel '{name}' already exists")
            channel = uow.channels.add(AppChannel(channel_name=name, owner_id=owner))
            uow.session.refresh(channel)
            out = _to_out(channel)
        log.info("channel created", extra={"account_id": str(owner)})
        return out

    def list(self, dto: ChannelListIn) -> ChannelListOut:
        owner = self._owner()
        pagination = self.ensure_pagination(page=dto.page, limit=dto.limit, sort=dto.sort)
        with self.ro_uow() as uow:
            page = uow.channels.list_live(owner, pagination)
            items = [_to_out(c) for c in page.items]
        return ChannelListOut(items=items, total=page.total, page=page.page, limit=page.limit)

    def rename(self, dto: ChannelRenameIn) -> ChannelOut:
        """
        Rename a live channel.

        :raises NotFoundError: Absent, owned by someone else, or deleted.
        :raises ServiceError: Blank name or name clash.
        """
        owner = self._owner()
        channel_id = _parse_id(dto.channel_id)
        name = self._clean_name(dto.channel_name)
        with self.rw_uow() as uow:
            channel = uow.channels.get_owned(channel_id, owner)
            if channel is None:
                raise NotFoundError("AppChannel", dto.channel_id)
            if uow.channels.name_taken(owner, name, exclude_id=channel_id):
                raise ServiceError(f"Channel '{name}' already exists")
            uow.channels.update(channel, channel_name=name)
            uow.session.refresh(channel)
            out = _to_out(channel)
        return out

    def soft_delete(self, channel_id: str) -> None:
        owner = self._owner()
        key = _parse_id(channel_id)
        with self.rw_uow() as uow:
            channel = uow.channels.get_owned(key, owner)
            if channel is None:
                raise NotFoundError("AppChannel", channel_id)
            uow.channels.update(channel, is_deleted=True)
        log.info("channel soft-deleted", extra={"account_id": str(owner)})

    def hard_delete(self, channel_id: str) -> None:
        """Remove the row, including channels that were soft-deleted before."""
        owner = self._owner()
        key = _parse_id(channel_id)
        with self.rw_uow() as uow:
            channel = uow.channels.get_owned(key, owner, include_deleted=True)
            if channel is None:
                raise NotFoundError("AppChannel", channel_id)
            uow.channels.delete(channel)
        log.info("channel deleted", extra={"account_id": str(owner)})
