"""Main CLI entry point."""

import click
from peopleledger.cli.session import SessionStore, session_path_for
from peopleledger.database.factories import create_database
from peopleledger.logging_config import setup_logging

# Import and register all commands at module level
from peopleledger.cli.commands import (
    auth,
    person,
    account,
    transaction,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to SQLite database file (overrides PEOPLELEDGER_DB_PATH environment variable)",
    envvar="PEOPLELEDGER_DB_PATH",
)
@click.option(
    "--db-url",
    help="SQLAlchemy database URL; takes precedence over --db-path",
    envvar="PEOPLELEDGER_DB_URL",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    envvar="PEOPLELEDGER_LOG_LEVEL",
    default="WARNING",
    show_default=True,
    help="Logging verbosity",
)
@click.option("--log-json", is_flag=True, help="Emit log records as JSON lines")
@click.pass_context
def cli(ctx, db_path: str | None, db_url: str | None, log_level: str, log_json: bool):
    """Peopleledger - people, accounts and their transactions.

    Keeps each account's outstanding balance reconciled with its
    transactions. All commands except 'auth' require a login.
    """
    ctx.ensure_object(dict)
    setup_logging(level=log_level, json_format=log_json)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_database(database_url=db_url, database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)
        ctx.obj["db"] = db
        ctx.obj["sessions"] = SessionStore(session_path_for(db.database_path))


# Register all commands
auth.register_commands(cli)
person.register_commands(cli)
account.register_commands(cli)
transaction.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
