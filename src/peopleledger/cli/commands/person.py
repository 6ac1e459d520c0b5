"""Person management commands."""

import click
from peopleledger.cli.account_resolution import require_user
from peopleledger.cli.display import format_balance
from peopleledger.cli.error_handling import reporting_errors
from peopleledger.domain.person import DEFAULT_PAGE_SIZE, PersonService


@click.group()
def person_group():
    """Manage persons."""
    pass


@person_group.command("list")
@click.option("--id-number", help="Only persons whose ID number contains this text")
@click.option("--surname", help="Only persons whose surname contains this text")
@click.option("--account-number", help="Only persons owning an account whose number contains this text")
@click.option("--page", type=int, default=1, show_default=True, help="Page to show")
@click.option(
    "--page-size",
    type=click.IntRange(min=1),
    default=DEFAULT_PAGE_SIZE,
    show_default=True,
    help="Persons per page",
)
@click.pass_context
def list_persons(
    ctx,
    id_number: str | None,
    surname: str | None,
    account_number: str | None,
    page: int,
    page_size: int,
) -> None:
    """List persons sorted by surname and name.

    Examples:
        peopleledger person list
        peopleledger person list --surname smi --page 2
        peopleledger person list --account-number 1002
    """
    require_user(ctx)
    service = PersonService(ctx.obj["db"])

    with reporting_errors(ctx):
        result = service.list_persons(
            id_number_contains=id_number,
            surname_contains=surname,
            account_number_contains=account_number,
            page=page,
            page_size=page_size,
        )

    if not result.items:
        click.echo("No persons found.")
        return

    click.echo("\nPersons:")
    click.echo("-" * 70)
    for p in result.items:
        click.echo(
            f"ID: {p.id:4d} | {p.surname or '':20s} | {p.name or '':15s} | ID number: {p.id_number}"
        )
    click.echo("-" * 70)
    click.echo(
        f"Page {result.page} of {max(result.total_pages, 1)} "
        f"({result.total_count} person{'s' if result.total_count != 1 else ''})"
    )


@person_group.command("create")
@click.argument("id_number", metavar="ID_NUMBER")
@click.option("--name", help="Given name")
@click.option("--surname", help="Surname")
@click.pass_context
def create_person(ctx, id_number: str, name: str | None, surname: str | None) -> None:
    """Create a new person.

    Examples:
        peopleledger person create 8001015009087 --name Alice --surname Smith
    """
    require_user(ctx)
    service = PersonService(ctx.obj["db"])

    with reporting_errors(ctx):
        person_id = service.create_person(name=name, surname=surname, id_number=id_number)
    click.echo(f"Created person '{id_number}' (ID: {person_id})")


@person_group.command("show")
@click.argument("person_id", type=int)
@click.pass_context
def show_person(ctx, person_id: int) -> None:
    """Show a person and their accounts."""
    require_user(ctx)
    service = PersonService(ctx.obj["db"])

    with reporting_errors(ctx):
        person = service.require_person(person_id)
        accounts = service.list_accounts_for_person(person_id)

    click.echo(f"Person {person.id}: {person.full_name or '(no name)'}")
    click.echo(f"  ID number: {person.id_number}")
    click.echo(f"  Version:   {person.version}")
    if not accounts:
        click.echo("  No accounts.")
        return
    click.echo("  Accounts:")
    for acc in accounts:
        status = " [closed]" if acc.is_closed else ""
        click.echo(
            f"    ID: {acc.id:4d} | {acc.account_number:20s} | "
            f"Balance: {format_balance(acc.outstanding_balance)}{status}"
        )


@person_group.command("edit")
@click.argument("person_id", type=int)
@click.option("--name", help="New given name (empty string clears it)")
@click.option("--surname", help="New surname (empty string clears it)")
@click.option("--id-number", help="New ID number")
@click.option(
    "--expected-version",
    type=int,
    help="Fail if the person was changed by someone else since this version",
)
@click.pass_context
def edit_person(
    ctx,
    person_id: int,
    name: str | None,
    surname: str | None,
    id_number: str | None,
    expected_version: int | None,
) -> None:
    """Edit a person.

    Only the options given are changed.

    Examples:
        peopleledger person edit 3 --surname Jones
        peopleledger person edit 3 --id-number 8001015009088 --expected-version 2
    """
    require_user(ctx)
    service = PersonService(ctx.obj["db"])

    with reporting_errors(ctx):
        person = service.require_person(person_id)
        service.edit_person(
            person_id=person_id,
            name=person.name if name is None else name,
            surname=person.surname if surname is None else surname,
            id_number=person.id_number if id_number is None else id_number,
            expected_version=person.version if expected_version is None else expected_version,
        )
    click.echo(f"Updated person {person_id}")


@person_group.command("delete")
@click.argument("person_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_person(ctx, person_id: int, yes: bool) -> None:
    """Delete a person.

    A person can only be deleted once all of their accounts are deleted.
    """
    require_user(ctx)
    service = PersonService(ctx.obj["db"])

    with reporting_errors(ctx):
        person = service.require_person(person_id)

    label = person.full_name or person.id_number
    if not yes and not click.confirm(f"Are you sure you want to delete person '{label}' (ID: {person_id})?"):
        click.echo("Deletion cancelled.")
        return

    with reporting_errors(ctx):
        service.delete_person(person_id)
    click.echo(f"Deleted person '{label}'")


def register_commands(cli):
    """Register person commands with main CLI."""
    cli.add_command(person_group, name="person")
