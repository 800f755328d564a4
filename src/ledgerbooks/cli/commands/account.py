"""Account management commands."""

from dataclasses import replace

import click

from ledgerbooks.cli.account_resolution import resolve_account_or_exit
from ledgerbooks.cli.books import load_books, save_books
from ledgerbooks.cli.error_handling import handle_domain_error
from ledgerbooks.domain.entities import AccountType
from ledgerbooks.domain.factories import new_account
from ledgerbooks.utils.amount_parser import parse_amount

ACCOUNT_TYPES = [t.name.lower() for t in AccountType]


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    required=True,
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    help="Account type",
)
@click.option("--starting-balance", default="0", help="Opening balance (default: 0)")
@click.pass_context
def create_account(ctx, name: str, account_type: str, starting_balance: str):
    """Create a new account.

    Examples:
        ledgerbooks account create "Checking" --type asset
        ledgerbooks account create "Visa" --type liability --starting-balance 250.00
    """
    try:
        balance = parse_amount(starting_balance)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    ledger = load_books(ctx)
    account = replace(
        new_account(name, AccountType[account_type.upper()]), starting_balance=balance
    )
    ledger.add_account(account)
    save_books(ctx, ledger)
    click.echo(f"Created account '{name}' (ID: {account.id})")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts with their balances."""
    ledger = load_books(ctx)

    accounts = sorted(ledger.accounts(), key=lambda a: a.account_type.order)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 72)
    for acc in accounts:
        balance = ledger.account_balance(acc.id)
        cutoff = acc.reconciliation.date.isoformat() if acc.reconciliation else "-"
        click.echo(
            f"ID: {str(acc.id)[:8]} | {acc.name:20s} | {acc.account_type.value:9s} "
            f"| {balance:>12.2f} | Reconciled: {cutoff}"
        )


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def delete_account(ctx, account: str) -> None:
    """Delete an account.

    ACCOUNT can be an account name, ID or ID prefix.

    The account can only be deleted if no transaction or schedule uses it.

    Examples:
        ledgerbooks account delete "Checking"
    """
    ledger = load_books(ctx)
    account_id = resolve_account_or_exit(ctx, ledger, account)
    name = ledger.get_account(account_id).name

    try:
        ledger.delete_account(account_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    save_books(ctx, ledger)
    click.echo(f"Deleted account '{name}'")


@account_group.command("balance")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def account_balance(ctx, account: str) -> None:
    """Show an account's entries with running balances.

    Examples:
        ledgerbooks account balance "Checking"
    """
    ledger = load_books(ctx)
    account_id = resolve_account_or_exit(ctx, ledger, account)
    acc = ledger.get_account(account_id)

    click.echo(f"\n{acc.name} ({acc.account_type.value})")
    click.echo("-" * 72)
    click.echo(f"{'':10s}   {'Opening balance':30s} {'':7s} {acc.starting_balance:>12.2f}")
    for entry in ledger.account_entries(account_id):
        flag = "R" if entry.reconciled else " "
        click.echo(
            f"{entry.date.isoformat()} {flag} {entry.description[:30]:30s} "
            f"{entry.side.value:6s} {entry.amount:>12.2f} {entry.balance:>12.2f}"
        )
    click.echo("-" * 72)
    click.echo(f"Balance: {ledger.account_balance(account_id):.2f}")


def register_commands(cli):
    """Register account commands with the CLI."""
    cli.add_command(account_group, name="account")
