"""Marshmallow schemas for the account endpoints."""

from __future__ import annotations

from marshmallow import Schema, fields

from .common import RequestSchema


class RegisterSchema(RequestSchema):
    """Registration payload.

    Emptiness and password confirmation are checked by the service so that
    its error precedence applies.
    """

    username = fields.String(required=True)
    password = fields.String(required=True)
    confirm_password = fields.String(required=True)
    captcha_id = fields.String(required=True)
    captcha_code = fields.String(required=True)


class LoginSchema(RequestSchema):
    username = fields.String(required=True)
    password = fields.String(required=True)
    captcha_id = fields.String(required=True)
    captcha_code = fields.String(required=True)


class RefreshTokenSchema(RequestSchema):
    account_id = fields.String(required=True)
    refresh_token = fields.String(required=True)


class CaptchaResponseSchema(Schema):
    captcha_id = fields.String(required=True)
    captcha_image = fields.String(required=True)


class RegisterResponseSchema(Schema):
    username = fields.String(required=True)
    create_info = fields.String(required=True)


class TokenPairSchema(Schema):
    access_token = fields.String(required=True)
    refresh_token = fields.String(required=True)


class LoginResponseSchema(TokenPairSchema):
    login_info = fields.String(required=True)


class AccountSchema(Schema):
    """Public account view returned by ``/me``."""

    id = fields.String(required=True)
    username = fields.String(required=True)
    full_name = fields.String(required=True)
    create_time = fields.DateTime(attribute="created_at")
    is_delete = fields.Boolean(attribute="is_deleted")
