"""Flask CLI commands for account administration."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext

from appupdate.core.security import get_security
from appupdate.models.account import Account
from appupdate.uow import SQLAlchemyUnitOfWork

LOGGER = logging.getLogger(__name__)


def _load(uow: SQLAlchemyUnitOfWork, username: str) -> Account:
    account = uow.accounts.get_by_username(username)
    if account is None:
        raise click.ClickException(f"No account named '{username}'.")
    return account


@click.group("accounts")
def accounts_cli() -> None:
    """Administer registered accounts."""


@accounts_cli.command("deactivate")
@click.argument("username")
@with_appcontext
def deactivate(username: str) -> None:
    """Soft-delete USERNAME and revoke its current tokens."""
    with SQLAlchemyUnitOfWork() as uow:
        account = _load(uow, username)
        uow.accounts.update(account, is_deleted=True)
        account_id = str(account.id)
    get_security().bindings.clear(account_id)
    LOGGER.info("account deactivated", extra={"account_id": account_id})
    click.echo(f"Account '{username}' deactivated.")


@accounts_cli.command("reactivate")
@click.argument("username")
@with_appcontext
def reactivate(username: str) -> None:
    """Clear the soft-delete flag on USERNAME."""
    with SQLAlchemyUnitOfWork() as uow:
        account = _load(uow, username)
        uow.accounts.update(account, is_deleted=False)
    click.echo(f"Account '{username}' reactivated.")


@accounts_cli.command("revoke")
@click.argument("username")
@with_appcontext
def revoke(username: str) -> None:
    """Revoke USERNAME's token pair; the account must log in again."""
    with SQLAlchemyUnitOfWork() as uow:
        account_id = str(_load(uow, username).id)
    get_security().bindings.clear(account_id)
    LOGGER.info("tokens revoked", extra={"account_id": account_id})
    click.echo(f"Tokens for '{username}' revoked.")
