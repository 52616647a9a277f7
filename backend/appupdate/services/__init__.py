"""Service layer public API.

Re-exports
----------
- Base primitives: :class:`BaseService`, :class:`ServiceContext`
- :class:`AuthService` and :class:`AuthorizationPipeline`
- :class:`CaptchaService`
- :class:`ChannelService`
"""

from __future__ import annotations

from ._shared.base import BaseService, ServiceContext
from .auth.authorization import AuthorizationPipeline, AuthorizedAccount
from .auth.service import AuthService
from .captcha.service import CaptchaService, IssuedCaptcha
from .channels.service import ChannelService

__all__ = [
    "BaseService",
    "ServiceContext",
    "AuthService",
    "AuthorizationPipeline",
    "AuthorizedAccount",
    "CaptchaService",
    "IssuedCaptcha",
    "ChannelService",
]
