"""Account model: login identity plus the currently bound token pair."""

from __future__ import annotations

from sqlalchemy import String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates

from appupdate.core.extensions import db

from .base import ReprMixin, SoftDeleteMixin, TimestampMixin, UUIDPKMixin

USERNAME_MAX_LENGTH = 50


class Account(UUIDPKMixin, ReprMixin, SoftDeleteMixin, TimestampMixin, db.Model):
    """
    Registered account.

    Fields
    ------
    username : str
        Unique login name, stored trimmed.
    password_hash : str
        Salted password hash; the plain password is never stored.
    full_name : str
        Display name. Defaults to the username at registration.
    access_token : str
        Access token currently bound to the account, ``""`` when none.
    refresh_token : str
        Refresh token currently bound to the account, ``""`` when none.
    is_deleted : bool
        Soft-delete flag (from mixin). Deleted accounts cannot log in.
    created_at : datetime
        Creation timestamp (from mixin).
    updated_at : datetime
        Update timestamp (from mixin).
    """

    __tablename__ = "accounts"

    username: Mapped[str] = mapped_column(String(USERNAME_MAX_LENGTH), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    access_token: Mapped[str] = mapped_column(Text, nullable=False, default="")
    refresh_token: Mapped[str] = mapped_column(Text, nullable=False, default="")

    __table_args__ = (UniqueConstraint("username", name="uq_accounts_username"),)

    @validates("username")
    def _normalize_username(self, key: str, value: str) -> str:
        """
        Trim and validate the username.

        :param key: Field name (``username``).
        :type key: str
        :param value: Username to normalize.
        :type value: str
        :returns: Trimmed username.
        :rtype: str
        :raises ValueError: If the username is blank or too long.
        """
        if not isinstance(value, str):
            raise ValueError("Username is required.")
        v = value.strip()
        if not v:
            raise ValueError("Username is required.")
        if len(v) > USERNAME_MAX_LENGTH:
            raise ValueError(f"Username must be at most {USERNAME_MAX_LENGTH} characters.")
        return v
