"""Running balance computation.

Balances are derived on every query by folding an account's entries over its
starting balance. Results are copies; stored entries are never touched.
"""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Iterable

from ledgerbooks.domain.entities import Account, Entry, Transaction


def _account_date(transaction: Transaction, account: Account) -> date:
    return transaction.entry_for_account(account.id).date


def sort_by_date(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Ledger-wide ordering by transaction date. Ties keep input order."""
    return sorted(transactions, key=lambda t: t.date)


def apply_entry(balance: Decimal, entry: Entry, account: Account) -> Decimal:
    """Apply one entry to a running balance of ``account``."""
    if entry.account_id != account.id:
        raise ValueError(
            f"Entry {entry.id} belongs to account {entry.account_id}, not {account.id}"
        )
    if entry.side == account.normal_balance:
        return balance + entry.amount
    return balance - entry.amount


def account_transactions(account: Account, transactions: Iterable[Transaction]) -> list[Transaction]:
    """Transactions involving ``account`` with running balances.

    Ordered by the date of the account's own entry; transactions on the same
    date keep their insertion order. Each entry for the account in the
    returned copies carries the balance after it.
    """
    involved = [t for t in transactions if t.involves_account(account.id)]
    involved.sort(key=lambda t: _account_date(t, account))

    balance = account.starting_balance
    result = []
    for transaction in involved:
        entries = []
        for entry in transaction.entries:
            if entry.account_id == account.id:
                balance = apply_entry(balance, entry, account)
                entry = replace(entry, balance=balance)
            entries.append(entry)
        result.append(replace(transaction, entries=tuple(entries)))
    return result


def account_entries(account: Account, transactions: Iterable[Transaction]) -> list[Entry]:
    """Entries of ``account`` in balance order, each with its running balance."""
    return [
        entry
        for transaction in account_transactions(account, transactions)
        for entry in transaction.entries
        if entry.account_id == account.id
    ]


def closing_balance(account: Account, transactions: Iterable[Transaction]) -> Decimal:
    entries = account_entries(account, transactions)
    if not entries:
        return account.starting_balance
    return entries[-1].balance
