"""Main CLI entry point."""

import click

from ledgerbooks.logging_config import configure_logging

# Import and register all commands at module level
from ledgerbooks.cli.commands import (
    account,
    add,
    dump,
    generate,
    modifier,
    reconcile,
    schedule,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(dir_okay=False),
    help="Path to database file (overrides LEDGERBOOKS_DB_PATH environment variable)",
    envvar="LEDGERBOOKS_DB_PATH",
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Ledgerbooks - double-entry books with recurring schedules.

    Record transactions between accounts, project recurring schedules into
    the future and reconcile accounts against bank statements.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose)

    # The database is opened lazily by the first command that needs it
    ctx.obj["db_path"] = db_path


# Register all commands
account.register_commands(cli)
add.register_commands(cli)
schedule.register_commands(cli)
modifier.register_commands(cli)
generate.register_commands(cli)
reconcile.register_commands(cli)
dump.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
