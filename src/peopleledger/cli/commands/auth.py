"""Sign-up and login commands."""

import click
from peopleledger.cli.account_resolution import require_user
from peopleledger.cli.error_handling import reporting_errors
from peopleledger.domain.credentials import CredentialService


@click.group()
def auth_group():
    """Sign up, log in and log out."""
    pass


@auth_group.command("signup")
@click.argument("name")
@click.argument("username")
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Password (6 to 100 characters); prompted for if omitted",
)
@click.pass_context
def signup(ctx, name: str, username: str, password: str) -> None:
    """Create a login.

    Examples:
        peopleledger auth signup "Alice Smith" alice
    """
    service = CredentialService(ctx.obj["db"])

    with reporting_errors(ctx):
        service.register(name=name, username=username, password=password)
    click.echo(f"Created user '{username}'. Please log in.")


@auth_group.command("login")
@click.argument("username")
@click.option("--password", prompt=True, hide_input=True, help="Password; prompted for if omitted")
@click.pass_context
def login(ctx, username: str, password: str) -> None:
    """Log in and start a two-hour session.

    The session is extended every time a command is run.
    """
    service = CredentialService(ctx.obj["db"])
    if not service.has_users():
        click.echo("No users exist yet. Run 'peopleledger auth signup' first.", err=True)
        ctx.exit(1)

    with reporting_errors(ctx):
        user = service.verify(username=username, password=password)
    ticket = ctx.obj["sessions"].start(user)
    click.echo(f"Welcome, {user.display_name}!")
    click.echo(f"Session expires at {ticket.expires_at:%Y-%m-%d %H:%M}")


@auth_group.command("logout")
@click.pass_context
def logout(ctx) -> None:
    """End the current session."""
    ctx.obj["sessions"].end()
    click.echo("Logged out.")


@auth_group.command("whoami")
@click.pass_context
def whoami(ctx) -> None:
    """Show the logged-in user."""
    user = require_user(ctx)
    click.echo(f"{user.display_name} ({user.username})")


def register_commands(cli):
    """Register auth commands with main CLI."""
    cli.add_command(auth_group, name="auth")
