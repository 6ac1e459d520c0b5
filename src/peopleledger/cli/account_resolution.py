"""CLI helpers for account resolution and login checks."""

from __future__ import annotations

import click
from peopleledger.cli.session import SessionStore
from peopleledger.domain.account import AccountService
from peopleledger.domain.entities import AuthenticatedUser
from peopleledger.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: str | int
) -> int:
    """Resolve account number or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_account(account_service, account)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def require_user(ctx: click.Context) -> AuthenticatedUser:
    """Return the logged-in identity, sliding the session expiry, or exit."""
    sessions: SessionStore = ctx.obj["sessions"]
    ticket = sessions.touch()
    if ticket is None:
        click.echo("Error: Not logged in. Run 'peopleledger auth login USERNAME'.", err=True)
        ctx.exit(1)
    return ticket.user
