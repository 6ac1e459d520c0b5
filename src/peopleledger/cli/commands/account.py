"""Account management commands."""

import click
from peopleledger.cli.account_resolution import require_user, resolve_account_or_exit
from peopleledger.cli.display import format_balance
from peopleledger.cli.error_handling import reporting_errors
from peopleledger.domain.account import AccountService
from peopleledger.domain.person import PersonService


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("list")
@click.argument("person_id", type=int)
@click.pass_context
def list_accounts(ctx, person_id: int) -> None:
    """List the accounts of a person."""
    require_user(ctx)
    service = PersonService(ctx.obj["db"])

    with reporting_errors(ctx):
        person = service.require_person(person_id)
        accounts = service.list_accounts_for_person(person_id)

    if not accounts:
        click.echo(f"No accounts found for {person.full_name or person.id_number}.")
        return

    click.echo(f"\nAccounts of {person.full_name or person.id_number}:")
    click.echo("-" * 60)
    for acc in accounts:
        status = " [closed]" if acc.is_closed else ""
        click.echo(
            f"ID: {acc.id:4d} | {acc.account_number:20s} | "
            f"Balance: {format_balance(acc.outstanding_balance)}{status}"
        )


@account_group.command("create")
@click.argument("person_id", type=int)
@click.argument("account_number", metavar="ACCOUNT_NUMBER")
@click.option("--closed", is_flag=True, help="Create the account closed to transactions")
@click.pass_context
def create_account(ctx, person_id: int, account_number: str, closed: bool) -> None:
    """Create a new account for a person.

    The outstanding balance always starts at zero.

    Examples:
        peopleledger account create 3 1002003004
    """
    require_user(ctx)
    service = AccountService(ctx.obj["db"])

    with reporting_errors(ctx):
        account_id = service.create_account(
            person_id=person_id, account_number=account_number, is_closed=closed
        )
    click.echo(f"Created account '{account_number}' (ID: {account_id})")


@account_group.command("show")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def show_account(ctx, account: str) -> None:
    """Show an account with its transactions.

    ACCOUNT can be an account number or ID.
    """
    require_user(ctx)
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)

    with reporting_errors(ctx):
        details = service.get_account_with_transactions(account_id)

    acc = details.account
    owner = details.person.full_name if details.person else "Unknown"
    click.echo(f"Account {acc.id}: {acc.account_number}")
    click.echo(f"  Owner:   {owner}")
    click.echo(f"  Balance: {format_balance(acc.outstanding_balance)}")
    click.echo(f"  Status:  {'closed' if acc.is_closed else 'open'}")
    click.echo(f"  Version: {acc.version}")
    click.echo(f"  Transactions: {len(details.transactions)}")
    for txn in details.transactions:
        click.echo(
            f"    {txn.id:5d} | {txn.transaction_date} | "
            f"{format_balance(txn.amount):>14s} | {txn.description}"
        )


@account_group.command("edit")
@click.argument("account", metavar="ACCOUNT")
@click.option("--account-number", help="New account number")
@click.option("--closed/--open", default=None, help="Close or reopen the account")
@click.option(
    "--expected-version",
    type=int,
    help="Fail if the account was changed by someone else since this version",
)
@click.pass_context
def edit_account(
    ctx,
    account: str,
    account_number: str | None,
    closed: bool | None,
    expected_version: int | None,
) -> None:
    """Edit an account number or close/reopen an account.

    The balance cannot be edited; use 'account recalculate' to reconcile it.

    Examples:
        peopleledger account edit 1002003004 --closed
        peopleledger account edit 5 --account-number 1002003005
    """
    require_user(ctx)
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)

    with reporting_errors(ctx):
        current = service.require_account(account_id)
        service.edit_account(
            account_id=account_id,
            account_number=current.account_number if account_number is None else account_number,
            is_closed=current.is_closed if closed is None else closed,
            expected_version=current.version if expected_version is None else expected_version,
        )
    click.echo(f"Updated account {account_id}")


@account_group.command("recalculate")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def recalculate_balance(ctx, account: str) -> None:
    """Recompute the balance from the account's transactions."""
    user = require_user(ctx)
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)

    with reporting_errors(ctx):
        balance = service.recalculate_balance(account_id, performed_by=user)
    click.echo(f"Balance of account {account_id}: {format_balance(balance)}")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account and all of its transactions.

    ACCOUNT can be an account number or ID.
    """
    require_user(ctx)
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)

    with reporting_errors(ctx):
        account_obj = service.require_account(account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.account_number}' "
        f"(ID: {account_id}) and all of its transactions?"
    ):
        click.echo("Deletion cancelled.")
        return

    with reporting_errors(ctx):
        removed = service.delete_account(account_id)
    click.echo(
        f"Deleted account '{account_obj.account_number}' "
        f"and {removed} transaction{'s' if removed != 1 else ''}"
    )


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
