"""Transaction management commands."""

import click
from peopleledger.cli.account_resolution import require_user, resolve_account_or_exit
from peopleledger.cli.display import format_balance
from peopleledger.cli.error_handling import reporting_errors
from peopleledger.domain.account import AccountService
from peopleledger.domain.transaction import TransactionService
from peopleledger.utils.amount_parser import parse_amount
from peopleledger.utils.date_parser import parse_date


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


def _parse_date_or_exit(ctx, value: str):
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


def _parse_amount_or_exit(ctx, value: str):
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


@transaction_group.command("list")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def list_transactions(ctx, account: str) -> None:
    """List transactions of an account, most recent first.

    ACCOUNT can be an account number or ID.
    """
    require_user(ctx)
    db = ctx.obj["db"]
    account_service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, account_service, account)

    with reporting_errors(ctx):
        account_obj = account_service.require_account(account_id)
        transactions = TransactionService(db).list_transactions(account_id)

    click.echo(f"\nAccount {account_obj.account_number}")
    click.echo(f"Outstanding balance: {format_balance(account_obj.outstanding_balance)}")
    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo("-" * 80)
    for txn in transactions:
        click.echo(
            f"ID: {txn.id:5d} | {txn.transaction_date} | {format_balance(txn.amount):>14s} | "
            f"{txn.description} (captured {txn.capture_date:%Y-%m-%d %H:%M})"
        )


@transaction_group.command("add")
@click.argument("account", metavar="ACCOUNT")
@click.option(
    "--date",
    "date_str",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--amount", required=True, help="Transaction amount (e.g., 123.45 or -123.45)")
@click.option("--description", required=True, help="Transaction description")
@click.pass_context
def add_transaction(ctx, account: str, date_str: str, amount: str, description: str) -> None:
    """Post a transaction against an open account.

    Examples:
        peopleledger transaction add 1002003004 --amount 100.00 --description "Deposit"
        peopleledger transaction add 5 --date yesterday --amount -40 --description "Fee"
    """
    require_user(ctx)
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)
    txn_date = _parse_date_or_exit(ctx, date_str)
    txn_amount = _parse_amount_or_exit(ctx, amount)

    with reporting_errors(ctx):
        transaction_id = TransactionService(db).create_transaction(
            account_id=account_id,
            transaction_date=txn_date,
            amount=txn_amount,
            description=description,
        )
        balance = AccountService(db).require_account(account_id).outstanding_balance

    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Date: {txn_date}")
    click.echo(f"  Amount: {format_balance(txn_amount)}")
    click.echo(f"  Description: {description}")
    click.echo(f"  New balance: {format_balance(balance)}")


@transaction_group.command("show")
@click.argument("transaction_id", type=int)
@click.pass_context
def show_transaction(ctx, transaction_id: int) -> None:
    """Show a transaction."""
    require_user(ctx)
    db = ctx.obj["db"]

    with reporting_errors(ctx):
        txn = TransactionService(db).require_transaction(transaction_id)
        account_obj = AccountService(db).require_account(txn.account_id)

    click.echo(f"Transaction {txn.id}")
    click.echo(f"  Account:     {account_obj.account_number}")
    click.echo(f"  Date:        {txn.transaction_date}")
    click.echo(f"  Captured:    {txn.capture_date:%Y-%m-%d %H:%M:%S}")
    click.echo(f"  Amount:      {format_balance(txn.amount)}")
    click.echo(f"  Description: {txn.description}")
    click.echo(f"  Version:     {txn.version}")


@transaction_group.command("edit")
@click.argument("transaction_id", type=int)
@click.option("--date", "date_str", help="New transaction date")
@click.option("--amount", help="New amount")
@click.option("--description", help="New description")
@click.option(
    "--expected-version",
    type=int,
    help="Fail if the transaction was changed by someone else since this version",
)
@click.pass_context
def edit_transaction(
    ctx,
    transaction_id: int,
    date_str: str | None,
    amount: str | None,
    description: str | None,
    expected_version: int | None,
) -> None:
    """Edit a transaction on an open account.

    Only the options given are changed. The balance moves by the
    difference between the new and the old amount.

    Examples:
        peopleledger transaction edit 12 --amount 25.00
    """
    require_user(ctx)
    service = TransactionService(ctx.obj["db"])

    with reporting_errors(ctx):
        txn = service.require_transaction(transaction_id)

    new_date = txn.transaction_date if date_str is None else _parse_date_or_exit(ctx, date_str)
    new_amount = txn.amount if amount is None else _parse_amount_or_exit(ctx, amount)

    with reporting_errors(ctx):
        adjustment = service.edit_transaction(
            transaction_id=transaction_id,
            transaction_date=new_date,
            amount=new_amount,
            description=txn.description if description is None else description,
            expected_version=txn.version if expected_version is None else expected_version,
        )
    click.echo(f"Updated transaction {transaction_id}")
    click.echo(f"  Balance adjustment: {format_balance(adjustment)}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction and reverse it from the account balance."""
    require_user(ctx)
    service = TransactionService(ctx.obj["db"])

    with reporting_errors(ctx):
        txn = service.require_transaction(transaction_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete transaction {transaction_id} "
        f"({format_balance(txn.amount)}, {txn.description})?"
    ):
        click.echo("Deletion cancelled.")
        return

    with reporting_errors(ctx):
        removed = service.delete_transaction(transaction_id)
    click.echo(f"Deleted transaction {transaction_id}, reversed {format_balance(removed.amount)}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
