"""Account repository: lookups used by authentication and administration."""

from __future__ import annotations

import uuid
from typing import cast

from sqlalchemy import select

from appupdate.models.account import Account
from appupdate.repositories.base import BaseRepository


class AccountRepository(BaseRepository[Account]):
    """Persistence-only repository for :class:`Account`.

    Token columns are written by the session binding store, never here.
    """

    model = Account

    def _sortable_fields(self):
        return {"username": Account.username, "created_at": Account.created_at}

    def _filterable_fields(self):
        return {"username": Account.username, "is_deleted": Account.is_deleted}

    def _updatable_fields(self):
        return {"full_name", "is_deleted"}

    def get_by_username(self, username: str) -> Account | None:
        """Fetch an account by its trimmed username, deleted or not.

        :param username: Username to search.
        :type username: str
        :returns: Account or ``None`` when absent.
        :rtype: Account | None
        """
        return self.find_one(username=username.strip())

    def exists_by_username(self, username: str) -> bool:
        """Return ``True`` when the username is already taken."""
        return self.exists(username=username.strip())

    def get_by_username_and_id(self, username: str, account_id: uuid.UUID) -> Account | None:
        """Fetch the account matching both token claims, or ``None``.

        :param username: ``username`` claim.
        :type username: str
        :param account_id: ``account_id`` claim parsed as UUID.
        :type account_id: uuid.UUID
        :returns: Account or ``None``.
        :rtype: Account | None
        """
        stmt = select(Account).where(Account.username == username, Account.id == account_id)
        return cast(Account | None, self.session.execute(stmt).scalars().first())
