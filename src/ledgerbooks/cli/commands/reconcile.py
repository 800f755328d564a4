"""Reconcile an account against a bank statement."""

import click

from ledgerbooks.cli.account_resolution import resolve_account_or_exit
from ledgerbooks.cli.books import load_books, save_books
from ledgerbooks.cli.error_handling import handle_domain_error
from ledgerbooks.domain.entities import ReconciliationStatus
from ledgerbooks.domain.statement_import import import_statement


@click.command("reconcile")
@click.argument("account", metavar="ACCOUNT")
@click.argument("statement", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--commit",
    is_flag=True,
    help="Move the reconciliation cutoff to the last matched transaction",
)
@click.pass_context
def reconcile(ctx, account: str, statement: str, commit: bool):
    """Compare an account with a statement CSV.

    The statement needs date, description and amount columns and may carry a
    balance column. Positive amounts increase the account.

    Examples:
        ledgerbooks reconcile Checking statement.csv
        ledgerbooks reconcile Checking statement.csv --commit
    """
    ledger = load_books(ctx)
    account_id = resolve_account_or_exit(ctx, ledger, account)
    acc = ledger.get_account(account_id)

    try:
        imported = import_statement(statement, acc)
    except ValueError as e:
        handle_domain_error(ctx, e)

    for error in imported.errors:
        click.echo(f"Warning: {error}", err=True)

    results = ledger.reconcile(account_id, imported.transactions)
    if not results:
        click.echo("No statement transactions to reconcile.")
        return

    click.echo(f"\nReconciling {acc.name}:")
    click.echo("-" * 72)
    for result in results:
        entry = result.transaction.entry_for_account(account_id)
        expected = f"{result.expected_balance:.2f}" if result.expected_balance is not None else "-"
        click.echo(
            f"{entry.date} | {entry.description[:28]:28s} | {entry.side.value:6s} "
            f"{entry.amount:>10.2f} | {result.status.value:12s} | expected: {expected}"
        )

    counts = {status: 0 for status in ReconciliationStatus}
    for result in results:
        counts[result.status] += 1
    click.echo("-" * 72)
    click.echo(", ".join(f"{status.value}: {count}" for status, count in counts.items()))

    if not commit:
        return

    matched = [r for r in results if r.status is ReconciliationStatus.MATCHED]
    if not matched:
        click.echo("Nothing matched; cutoff unchanged.")
        return

    try:
        ledger.reconcile_account(account_id, matched[-1].matched_transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    save_books(ctx, ledger)
    cutoff = ledger.get_account(account_id).reconciliation
    click.echo(f"Reconciled through {cutoff.date} (balance {cutoff.balance:.2f})")


def register_commands(cli):
    """Register reconcile command with main CLI."""
    cli.add_command(reconcile)
