"""Convenience exports for application schemas."""

from __future__ import annotations

from .channels import ChannelPageSchema, ChannelSchema, ChannelWriteSchema
from .common import PageSchema, PaginationQuerySchema, RequestSchema
from .users import (
    AccountSchema,
    CaptchaResponseSchema,
    LoginResponseSchema,
    LoginSchema,
    RefreshTokenSchema,
    RegisterResponseSchema,
    RegisterSchema,
    TokenPairSchema,
)

__all__ = [
    "RequestSchema",
    "PaginationQuerySchema",
    "PageSchema",
    "RegisterSchema",
    "LoginSchema",
    "RefreshTokenSchema",
    "CaptchaResponseSchema",
    "RegisterResponseSchema",
    "TokenPairSchema",
    "LoginResponseSchema",
    "AccountSchema",
    "ChannelWriteSchema",
    "ChannelSchema",
    "ChannelPageSchema",
]
