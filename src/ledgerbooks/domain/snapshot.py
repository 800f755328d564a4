"""Plain-data view of a ledger, for dumping and inspection."""

from dataclasses import asdict
from typing import Any

from ledgerbooks.domain.entities import Transaction
from ledgerbooks.domain.ledger import Ledger


def _transaction_to_dict(transaction: Transaction) -> dict[str, Any]:
    data = asdict(transaction)
    # Computed balances are not part of the books
    for entry in data["entries"]:
        entry.pop("balance", None)
    return data


def ledger_to_dict(ledger: Ledger) -> dict[str, Any]:
    """Describe the whole ledger with dicts and lists.

    Values keep their Python types (UUID, date, Decimal, str enums); pass
    ``default=str`` when handing the result to ``json.dumps``.
    """
    return {
        "id": ledger.id,
        "name": ledger.name,
        "settings": asdict(ledger.settings),
        "accounts": [asdict(a) for a in ledger.accounts()],
        "transactions": [_transaction_to_dict(t) for t in ledger.transactions()],
        "scheduler": {
            "end_date": ledger.scheduler.end_date,
            "schedules": [asdict(s) for s in ledger.schedules()],
            "modifiers": [asdict(m) for m in ledger.modifiers()],
        },
    }
