"""Add transaction command."""

import click

from ledgerbooks.cli.account_resolution import resolve_account_or_exit
from ledgerbooks.cli.books import load_books, save_books
from ledgerbooks.cli.error_handling import handle_domain_error
from ledgerbooks.domain.factories import new_transfer
from ledgerbooks.utils.amount_parser import parse_amount
from ledgerbooks.utils.date_parser import parse_date


@click.command("add")
@click.option("--debit", required=True, help="Account to debit (name or ID)")
@click.option("--credit", required=True, help="Account to credit (name or ID)")
@click.option("--amount", required=True, help="Transaction amount (e.g., 123.45)")
@click.option(
    "--date",
    required=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--description", default="", help="Transaction description")
@click.pass_context
def add_transaction(
    ctx,
    debit: str,
    credit: str,
    amount: str,
    date: str,
    description: str,
):
    """Record a transaction moving AMOUNT from the credit to the debit account.

    Examples:
        ledgerbooks add --debit Groceries --credit Checking --amount 54.20 --date today
        ledgerbooks add --debit Checking --credit Salary --amount 3000 --date 2024-01-31 --description "January pay"
    """
    ledger = load_books(ctx)

    debit_id = resolve_account_or_exit(ctx, ledger, debit)
    credit_id = resolve_account_or_exit(ctx, ledger, credit)

    try:
        txn_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    transaction = new_transfer(debit_id, credit_id, txn_amount, txn_date, description)
    try:
        ledger.add_transaction(transaction)
    except ValueError as e:
        handle_domain_error(ctx, e)

    save_books(ctx, ledger)
    click.echo(f"Created transaction {transaction.id}")
    click.echo(f"  Debit: {ledger.get_account(debit_id).name}")
    click.echo(f"  Credit: {ledger.get_account(credit_id).name}")
    click.echo(f"  Date: {txn_date}")
    click.echo(f"  Amount: {txn_amount:,.2f}")
    if description:
        click.echo(f"  Description: {description}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
