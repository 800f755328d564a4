"""Dump a snapshot as JSON."""

import json
from pathlib import Path

import click

from ledgerbooks.cli.error_handling import handle_domain_error
from ledgerbooks.database.factories import create_sqlite_repository
from ledgerbooks.domain.errors import DomainError
from ledgerbooks.domain.snapshot import ledger_to_dict


@click.command("dump")
@click.argument("path", type=click.Path(dir_okay=False))
@click.pass_context
def dump(ctx, path: str):
    """Print the snapshot stored at PATH as JSON.

    PATH is read as is; --db-path does not apply.

    Examples:
        ledgerbooks dump ~/.ledgerbooks/books.db
    """
    if not Path(path).is_file():
        click.echo(f"Error: Snapshot file not found: {path}", err=True)
        ctx.exit(1)

    repository = create_sqlite_repository(database_path=path)
    try:
        ledger = repository.load()
    except DomainError as e:
        handle_domain_error(ctx, e)
    finally:
        repository.disconnect()

    click.echo(json.dumps(ledger_to_dict(ledger), indent=2, default=str))


def register_commands(cli):
    """Register dump command with main CLI."""
    cli.add_command(dump)
