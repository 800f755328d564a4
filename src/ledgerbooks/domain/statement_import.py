"""Bank statement import for reconciliation."""

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from uuid import uuid4

from ledgerbooks.domain.entities import Account, Entry, Transaction, TransactionStatus
from ledgerbooks.domain.errors import ValidationError
from ledgerbooks.utils.amount_parser import parse_amount
from ledgerbooks.utils.date_parser import parse_date

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("date", "description", "amount")


@dataclass
class StatementImport:
    """Transactions read from a statement plus per-row errors."""

    transactions: list[Transaction] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def _row_to_transaction(row: dict[str, Optional[str]], account: Account) -> Transaction:
    date_str = (row.get("date") or "").strip()
    if not date_str:
        raise ValueError("Missing date")
    amount_str = (row.get("amount") or "").strip()
    if not amount_str:
        raise ValueError("Missing amount")

    entry_date = parse_date(date_str)
    amount = parse_amount(amount_str)
    balance_str = (row.get("balance") or "").strip()
    balance = parse_amount(balance_str) if balance_str else None

    # Positive statement amounts increase the account
    side = account.normal_balance if amount >= 0 else account.normal_balance.opposite
    transaction_id = uuid4()
    entry = Entry(
        id=uuid4(),
        transaction_id=transaction_id,
        date=entry_date,
        description=(row.get("description") or "").strip(),
        account_id=account.id,
        side=side,
        amount=abs(amount),
        balance=balance,
    )
    return Transaction(id=transaction_id, entries=(entry,), status=TransactionStatus.RECORDED)


def import_statement(csv_file_path: str, account: Account) -> StatementImport:
    """Read a statement CSV into external transactions for ``account``.

    Args:
        csv_file_path: Path to the statement CSV
        account: Account the statement belongs to

    Returns:
        StatementImport with parsed transactions and row errors

    Raises:
        FileNotFoundError: If the CSV file doesn't exist
        ValidationError: If required columns are missing
    """
    csv_path = Path(csv_file_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Statement file not found: {csv_file_path}")

    result = StatementImport()
    with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
        sample = f.read(1024)
        f.seek(0)
        try:
            delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t").delimiter
        except csv.Error:
            delimiter = ","

        reader = csv.DictReader(f, delimiter=delimiter)
        if reader.fieldnames is None:
            raise ValidationError("Statement file has no columns")
        columns = {name.strip().lower(): name for name in reader.fieldnames}
        missing = [c for c in REQUIRED_COLUMNS if c not in columns]
        if missing:
            raise ValidationError(f"Statement file missing required columns: {', '.join(missing)}")

        for row_num, raw in enumerate(reader, start=2):  # header is row 1
            row: dict[str, Optional[str]] = {key: raw.get(name) for key, name in columns.items()}
            try:
                result.transactions.append(_row_to_transaction(row, account))
            except ValueError as e:
                result.errors.append(f"Row {row_num}: {e}")

    logger.info(
        "imported %d statement rows for account %s (%d errors)",
        len(result.transactions),
        account.name,
        len(result.errors),
    )
    return result
