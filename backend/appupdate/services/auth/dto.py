# appupdate/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for registration.

    :param username: Desired username (trimmed before use).
    :param password: Raw password.
    :param confirm_password: Must equal ``password``.
    :param captcha_id: Identifier returned by the captcha endpoint.
    :param captcha_code: Code typed by the user.
    """

    username: str
    password: str
    confirm_password: str
    captcha_id: str
    captcha_code: str


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param username: Account username.
    :param password: Raw password (to be verified).
    :param captcha_id: Identifier returned by the captcha endpoint.
    :param captcha_code: Code typed by the user.
    """

    username: str
    password: str
    captcha_id: str
    captcha_code: str


@dataclass(frozen=True, slots=True)
class RefreshIn:
    account_id: str
    refresh_token: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterOut:
    username: str
    create_info: str


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :param refresh_token: Encoded refresh JWT.
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class LoginOut:
    access_token: str
    refresh_token: str
    login_info: str


@dataclass(frozen=True, slots=True)
class AccountOut:
    """
    Public view of an account.

    :param id: Account id (UUID string).
    :param username: Username.
    :param full_name: Display name.
    :param created_at: Creation timestamp.
    :param is_deleted: Soft-delete flag.
    """

    id: str
    username: str
    full_name: str
    created_at: datetime
    is_deleted: bool
