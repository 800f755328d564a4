"""Load and save the books for a CLI command."""

import click

from ledgerbooks.cli.error_handling import handle_domain_error
from ledgerbooks.database.base import BookRepository
from ledgerbooks.database.factories import create_sqlite_repository
from ledgerbooks.domain.errors import DomainError
from ledgerbooks.domain.ledger import Ledger


def get_repository(ctx: click.Context) -> BookRepository:
    """Return the command's repository, opening it on first use."""
    repository = ctx.obj.get("repository")
    if repository is None:
        try:
            repository = create_sqlite_repository(database_path=ctx.obj.get("db_path"))
            repository.connect()
            repository.initialize_schema()
        except DomainError as e:
            handle_domain_error(ctx, e)
        ctx.obj["repository"] = repository
    return repository


def load_books(ctx: click.Context) -> Ledger:
    try:
        return get_repository(ctx).load()
    except DomainError as e:
        handle_domain_error(ctx, e)


def save_books(ctx: click.Context, ledger: Ledger) -> None:
    try:
        get_repository(ctx).save(ledger)
    except DomainError as e:
        handle_domain_error(ctx, e)
