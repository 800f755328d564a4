"""Generate projected transactions from schedules."""

import click

from ledgerbooks.cli.account_resolution import resolve_schedule_or_exit
from ledgerbooks.cli.books import load_books, save_books
from ledgerbooks.cli.error_handling import handle_domain_error
from ledgerbooks.utils.date_parser import parse_date


@click.command("generate")
@click.option(
    "--until",
    required=True,
    help="Horizon date (YYYY-MM-DD or relative like '+3m', 'end of year')",
)
@click.option("--schedule", help="Only generate this schedule (name or ID)")
@click.pass_context
def generate(ctx, until: str, schedule: str | None):
    """Project schedules into transactions up to a horizon.

    Without --schedule every schedule runs and the horizon is remembered.
    With --schedule only that schedule runs and the horizon is left alone.

    Examples:
        ledgerbooks generate --until 2024-12-31
        ledgerbooks generate --until +6m --schedule Rent
    """
    try:
        end_date = parse_date(until)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    ledger = load_books(ctx)
    try:
        if schedule is None:
            transactions = ledger.generate(end_date)
        else:
            schedule_id = resolve_schedule_or_exit(ctx, ledger, schedule)
            transactions = ledger.generate_by_schedule(end_date, schedule_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    save_books(ctx, ledger)

    click.echo(f"Generated {len(transactions)} transactions through {end_date}")
    for t in transactions:
        entry = t.entries[0]
        click.echo(f"  {t.date} | {entry.description[:30]:30s} | {entry.amount:>10.2f}")


def register_commands(cli):
    """Register generate command with main CLI."""
    cli.add_command(generate)
