"""CLI error handling helpers."""

import logging
from contextlib import contextmanager
from typing import Iterator

import click
from sqlalchemy.exc import SQLAlchemyError

from peopleledger.domain.errors import DomainError, ValidationErrors

logger = logging.getLogger(__name__)

STORAGE_FAILURE = "An unexpected storage error occurred. Nothing was changed."


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    if isinstance(error, ValidationErrors):
        for item in error.errors:
            click.echo(f"Error: {item}", err=True)
    else:
        click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def handle_storage_error(ctx: click.Context, error: SQLAlchemyError) -> None:
    """Log an unexpected storage failure and report it generically."""
    logger.error("Storage failure: %s", error, exc_info=error)
    click.echo(f"Error: {STORAGE_FAILURE}", err=True)
    ctx.exit(1)


@contextmanager
def reporting_errors(ctx: click.Context) -> Iterator[None]:
    """Turn domain and storage errors raised in the block into CLI exits."""
    try:
        yield
    except DomainError as e:
        handle_domain_error(ctx, e)
    except SQLAlchemyError as e:
        handle_storage_error(ctx, e)
