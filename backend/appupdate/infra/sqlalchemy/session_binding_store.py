"""SQLAlchemy adapter keeping the bound token pair on the ``accounts`` row."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError

from appupdate.models.account import Account
from appupdate.services._shared.errors import AccountNotFoundError, PersistenceError
from appupdate.services._shared.ports import SessionBindingStore, TokenSlot
from appupdate.uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

log = logging.getLogger(__name__)


def _as_uuid(account_id: str | uuid.UUID) -> uuid.UUID | None:
    if isinstance(account_id, uuid.UUID):
        return account_id
    try:
        return uuid.UUID(str(account_id))
    except ValueError:
        return None


@dataclass(slots=True)
class SQLAlchemySessionBindingStore(SessionBindingStore):
    """
    Each write is one ``UPDATE`` statement committed in its own unit of work,
    so concurrent writers never interleave partial pairs.
    """

    def bind(self, account_id: str, access_token: str, refresh_token: str) -> None:
        key = _as_uuid(account_id)
        if key is None:
            raise AccountNotFoundError(str(account_id))
        stmt = (
            update(Account)
            .where(Account.id == key)
            .values(access_token=access_token, refresh_token=refresh_token)
        )
        try:
            with SQLAlchemyUnitOfWork() as uow:
                rowcount = uow.session.execute(stmt).rowcount
        except SQLAlchemyError as exc:
            log.error("binding write failed for account %s", key, exc_info=True)
            raise PersistenceError("failed to persist token binding") from exc
        if rowcount == 0:
            raise AccountNotFoundError(str(key))

    def rebind(
        self, account_id: str, expected_refresh: str, access_token: str, refresh_token: str
    ) -> bool:
        key = _as_uuid(account_id)
        if key is None or not expected_refresh:
            return False
        stmt = (
            update(Account)
            .where(Account.id == key, Account.refresh_token == expected_refresh)
            .values(access_token=access_token, refresh_token=refresh_token)
        )
        try:
            with SQLAlchemyUnitOfWork() as uow:
                rowcount = uow.session.execute(stmt).rowcount
        except SQLAlchemyError as exc:
            log.error("binding swap failed for account %s", key, exc_info=True)
            raise PersistenceError("failed to persist token binding") from exc
        return rowcount == 1

    def is_bound(self, account_id: str, token: str, slot: TokenSlot) -> bool:
        key = _as_uuid(account_id)
        if key is None or not token:
            return False
        column = Account.access_token if slot is TokenSlot.ACCESS else Account.refresh_token
        try:
            with SQLAlchemyReadOnlyUnitOfWork() as uow:
                stored = uow.session.execute(select(column).where(Account.id == key)).scalar()
        except SQLAlchemyError as exc:
            raise PersistenceError("failed to read token binding") from exc
        return stored is not None and stored == token

    def clear(self, account_id: str) -> None:
        self.bind(account_id, "", "")
