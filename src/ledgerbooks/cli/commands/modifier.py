"""Compounding modifier commands."""

from decimal import Decimal

import click

from ledgerbooks.cli.books import load_books, save_books
from ledgerbooks.cli.error_handling import handle_domain_error
from ledgerbooks.domain.entities import Period
from ledgerbooks.domain.factories import new_modifier
from ledgerbooks.utils.amount_parser import parse_amount, parse_percentage
from ledgerbooks.utils.date_parser import parse_date

PERIODS = [p.name.lower() for p in Period]


@click.group()
def modifier_group():
    """Manage compounding modifiers."""
    pass


@modifier_group.command("add")
@click.argument("name", metavar="NAME")
@click.option(
    "--period",
    required=True,
    type=click.Choice(PERIODS, case_sensitive=False),
    help="Unit of the modifier cycle",
)
@click.option("--frequency", default=1, type=int, help="Periods per cycle (default: 1)")
@click.option("--start", required=True, help="Date of the first cycle boundary")
@click.option("--end", help="Last date a cycle boundary may fall on")
@click.option("--amount", default="0", help="Flat amount added per cycle")
@click.option("--percentage", default="0", help="Growth per cycle (e.g., '3%' or 0.03)")
@click.pass_context
def add_modifier(
    ctx,
    name: str,
    period: str,
    frequency: int,
    start: str,
    end: str | None,
    amount: str,
    percentage: str,
):
    """Define a modifier that grows bound schedule amounts each cycle.

    Examples:
        ledgerbooks modifier add "Rent increase" --period years --start 2025-01-01 --percentage 3%
        ledgerbooks modifier add "Raise" --period months --frequency 6 --start 2024-07-01 --amount 50
    """
    try:
        start_date = parse_date(start)
        end_date = parse_date(end) if end else None
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        flat = parse_amount(amount)
        rate = parse_percentage(percentage)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    if flat == Decimal("0") and rate == Decimal("0"):
        click.echo("Warning: modifier has neither an amount nor a percentage", err=True)

    ledger = load_books(ctx)
    modifier = new_modifier(
        name, Period[period.upper()], frequency, start_date, flat, rate, end_date
    )
    try:
        ledger.add_modifier(modifier)
    except ValueError as e:
        handle_domain_error(ctx, e)

    save_books(ctx, ledger)
    click.echo(f"Created modifier '{name}' (ID: {modifier.id})")


@modifier_group.command("list")
@click.pass_context
def list_modifiers(ctx):
    """List all modifiers."""
    ledger = load_books(ctx)

    modifiers = ledger.modifiers()
    if not modifiers:
        click.echo("No modifiers found.")
        return

    click.echo("\nModifiers:")
    click.echo("-" * 72)
    for m in modifiers:
        click.echo(
            f"ID: {str(m.id)[:8]} | {m.name:20s} | every {m.frequency} {m.period.value.lower()} "
            f"from {m.start_date} | +{m.amount} | +{m.percentage * 100:.2f}%"
        )


def register_commands(cli):
    """Register modifier commands with the CLI."""
    cli.add_command(modifier_group, name="modifier")
