"""Owner-scoped release channel endpoints."""

from __future__ import annotations

from flask import Blueprint

from appupdate.api.deps import (
    json_body,
    json_response,
    parse_pagination,
    require_auth,
    service_context,
    timing,
)
from appupdate.schemas import ChannelPageSchema, ChannelSchema, ChannelWriteSchema
from appupdate.services.channels.dto import ChannelCreateIn, ChannelListIn, ChannelRenameIn
from appupdate.services.channels.service import ChannelService

bp = Blueprint("channels", __name__)

write_schema = ChannelWriteSchema()
channel_schema = ChannelSchema()
page_schema = ChannelPageSchema()


def _service() -> ChannelService:
    return ChannelService(ctx=service_context())


@bp.post("")
@require_auth
@timing
def create_channel():
    data = write_schema.load(json_body())
    channel = _service().create(ChannelCreateIn(channel_name=data["channel_name"]))
    return json_response(channel_schema.dump(channel))


@bp.get("")
@require_auth
@timing
def list_channels():
    """List the caller's live channels, paginated with ``page``/``limit``/``sort``."""

    p = parse_pagination()
    result = _service().list(ChannelListIn(page=p.page, limit=p.limit, sort=tuple(p.sort)))
    return json_response(page_schema.dump(result))


@bp.patch("/<channel_id>")
@require_auth
@timing
def rename_channel(channel_id: str):
    data = write_schema.load(json_body())
    channel = _service().rename(
        ChannelRenameIn(channel_id=channel_id, channel_name=data["channel_name"])
    )
    return json_response(channel_schema.dump(channel))


@bp.delete("/<channel_id>")
@require_auth
@timing
def delete_channel(channel_id: str):
    _service().soft_delete(channel_id)
    return json_response(None, msg="deleted")


@bp.delete("/<channel_id>/permanent")
@require_auth
@timing
def purge_channel(channel_id: str):
    _service().hard_delete(channel_id)
    return json_response(None, msg="deleted")
