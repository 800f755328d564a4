"""Recurring schedule commands."""

from dataclasses import replace

import click

from ledgerbooks.cli.account_resolution import (
    resolve_account_or_exit,
    resolve_modifier_or_exit,
    resolve_schedule_or_exit,
)
from ledgerbooks.cli.books import load_books, save_books
from ledgerbooks.cli.error_handling import handle_domain_error
from ledgerbooks.domain.entities import Period, ScheduleEntry, ScheduleModifier, Side
from ledgerbooks.domain.factories import new_schedule
from ledgerbooks.domain.scheduler import next_schedule_date
from ledgerbooks.utils.amount_parser import parse_amount
from ledgerbooks.utils.date_parser import parse_date

PERIODS = [p.name.lower() for p in Period]


@click.group()
def schedule_group():
    """Manage recurring schedules."""
    pass


@schedule_group.command("add")
@click.argument("name", metavar="NAME")
@click.option(
    "--period",
    required=True,
    type=click.Choice(PERIODS, case_sensitive=False),
    help="Unit of the recurrence",
)
@click.option("--frequency", default=1, type=int, help="Periods between occurrences (default: 1)")
@click.option("--start", required=True, help="Date of the first occurrence")
@click.option("--end", help="Last date an occurrence may fall on")
@click.option("--debit", required=True, help="Account to debit (name or ID)")
@click.option("--credit", required=True, help="Account to credit (name or ID)")
@click.option("--amount", required=True, help="Amount per occurrence")
@click.option("--description", default=None, help="Description (defaults to NAME)")
@click.pass_context
def add_schedule(
    ctx,
    name: str,
    period: str,
    frequency: int,
    start: str,
    end: str | None,
    debit: str,
    credit: str,
    amount: str,
    description: str | None,
):
    """Create a recurring two-entry schedule.

    Monthly and yearly schedules keep their start day: a schedule starting on
    the 31st falls on the last day of shorter months and returns to the 31st
    afterwards.

    Examples:
        ledgerbooks schedule add Rent --period months --start 2024-01-01 --debit Rent --credit Checking --amount 1200
        ledgerbooks schedule add Payday --period weeks --frequency 2 --start 2024-01-05 --debit Checking --credit Salary --amount 1500
    """
    try:
        start_date = parse_date(start)
        end_date = parse_date(end) if end else None
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        schedule_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    ledger = load_books(ctx)
    debit_id = resolve_account_or_exit(ctx, ledger, debit)
    credit_id = resolve_account_or_exit(ctx, ledger, credit)

    text = description if description is not None else name
    schedule = new_schedule(
        name,
        Period[period.upper()],
        frequency,
        start_date,
        [
            ScheduleEntry(text, debit_id, Side.DEBIT, schedule_amount),
            ScheduleEntry(text, credit_id, Side.CREDIT, schedule_amount),
        ],
        end_date=end_date,
    )
    try:
        ledger.add_schedule(schedule)
    except ValueError as e:
        handle_domain_error(ctx, e)

    save_books(ctx, ledger)
    click.echo(f"Created schedule '{name}' (ID: {schedule.id})")


@schedule_group.command("list")
@click.pass_context
def list_schedules(ctx):
    """List all schedules and their next occurrence."""
    ledger = load_books(ctx)

    schedules = ledger.schedules()
    if not schedules:
        click.echo("No schedules found.")
        return

    modifiers = {m.id: m for m in ledger.modifiers()}
    click.echo("\nSchedules:")
    click.echo("-" * 72)
    for s in schedules:
        amount = s.entries[0].amount
        ends = f" until {s.end_date}" if s.end_date else ""
        click.echo(
            f"ID: {str(s.id)[:8]} | {s.name:20s} | every {s.frequency} {s.period.value.lower()}"
            f"{ends} | {amount:>10.2f} | next: {next_schedule_date(s)}"
        )
        for binding in s.modifiers:
            click.echo(
                f"    modifier: {modifiers[binding.modifier_id].name} "
                f"(cycle {binding.cycle_count})"
            )
    if ledger.scheduler.end_date is not None:
        click.echo(f"\nGenerated through {ledger.scheduler.end_date}")


@schedule_group.command("bind")
@click.argument("schedule", metavar="SCHEDULE")
@click.argument("modifier", metavar="MODIFIER")
@click.pass_context
def bind_modifier(ctx, schedule: str, modifier: str):
    """Bind a modifier to a schedule.

    Modifiers apply in the order they were bound.

    Examples:
        ledgerbooks schedule bind Rent "Rent increase"
    """
    ledger = load_books(ctx)
    schedule_id = resolve_schedule_or_exit(ctx, ledger, schedule)
    modifier_id = resolve_modifier_or_exit(ctx, ledger, modifier)

    current = ledger.get_schedule(schedule_id)
    if any(b.modifier_id == modifier_id for b in current.modifiers):
        click.echo(f"Error: Modifier is already bound to schedule '{current.name}'", err=True)
        ctx.exit(1)

    updated = replace(
        current, modifiers=current.modifiers + (ScheduleModifier(modifier_id=modifier_id),)
    )
    try:
        ledger.update_schedule(updated)
    except ValueError as e:
        handle_domain_error(ctx, e)

    save_books(ctx, ledger)
    click.echo(f"Bound modifier to schedule '{current.name}'")


@schedule_group.command("reset")
@click.argument("schedule", metavar="SCHEDULE")
@click.pass_context
def reset_schedule(ctx, schedule: str):
    """Restart a schedule at its start date.

    Transactions it already generated are kept.
    """
    ledger = load_books(ctx)
    schedule_id = resolve_schedule_or_exit(ctx, ledger, schedule)
    ledger.scheduler.reset_schedule(schedule_id)
    save_books(ctx, ledger)
    click.echo(f"Reset schedule '{ledger.get_schedule(schedule_id).name}'")


def register_commands(cli):
    """Register schedule commands with the CLI."""
    cli.add_command(schedule_group, name="schedule")
