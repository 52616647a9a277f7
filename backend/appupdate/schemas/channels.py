"""Marshmallow schemas for release channels."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from .common import PageSchema, RequestSchema


class ChannelWriteSchema(RequestSchema):
    channel_name = fields.String(required=True, validate=validate.Length(max=100))


class ChannelSchema(Schema):
    id = fields.String(required=True)
    channel_name = fields.String(required=True)
    owner_id = fields.String(required=True)
    create_time = fields.DateTime(attribute="created_at")
    update_time = fields.DateTime(attribute="updated_at")


class ChannelPageSchema(PageSchema):
    items = fields.List(fields.Nested(ChannelSchema), required=True)
