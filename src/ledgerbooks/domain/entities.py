"""Domain model entities for ledgerbooks.

These are pure data classes representing ledger concepts, independent of the
snapshot store. Entities are frozen; the ledger and scheduler produce updated
copies with ``dataclasses.replace`` instead of mutating them in place.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID


class Side(str, Enum):
    """Side of a ledger entry."""

    DEBIT = "Debit"
    CREDIT = "Credit"

    @property
    def opposite(self) -> "Side":
        return Side.CREDIT if self is Side.DEBIT else Side.DEBIT


class AccountType(str, Enum):
    """Account classification. Each type fixes its normal balance side."""

    ASSET = "Asset"
    LIABILITY = "Liability"
    REVENUE = "Revenue"
    EXPENSE = "Expense"
    EQUITY = "Equity"

    @property
    def normal_balance(self) -> Side:
        if self in (AccountType.ASSET, AccountType.EXPENSE):
            return Side.DEBIT
        return Side.CREDIT

    @property
    def order(self) -> int:
        """Display order: assets first, equity last."""
        return list(AccountType).index(self)


class TransactionStatus(str, Enum):
    PROJECTED = "Projected"
    RECORDED = "Recorded"


class Period(str, Enum):
    """Unit of a recurrence."""

    DAYS = "Days"
    WEEKS = "Weeks"
    MONTHS = "Months"
    YEARS = "Years"


class ReconciliationStatus(str, Enum):
    MATCHED = "Matched"
    PARTIAL_MATCH = "PartialMatch"
    MISMATCH = "Mismatch"
    UNMATCHED = "Unmatched"


@dataclass(frozen=True)
class ReconciliationCutoff:
    """Latest reconciled position of an account."""

    date: date
    balance: Decimal
    transaction_id: UUID


@dataclass(frozen=True)
class Account:
    """Ledger account domain entity."""

    id: UUID
    name: str
    account_type: AccountType
    starting_balance: Decimal = Decimal("0")
    reconciliation: Optional[ReconciliationCutoff] = None

    @property
    def normal_balance(self) -> Side:
        return self.account_type.normal_balance


@dataclass(frozen=True)
class Entry:
    """One side of a transaction against a single account.

    ``balance`` is a view-only running total filled in on the copies returned
    by balance queries. It takes no part in equality and is never persisted.
    """

    id: UUID
    transaction_id: UUID
    date: date
    description: str
    account_id: UUID
    side: Side
    amount: Decimal
    reconciled: bool = False
    balance: Optional[Decimal] = field(default=None, compare=False)


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: UUID
    entries: tuple[Entry, ...]
    status: TransactionStatus = TransactionStatus.RECORDED
    schedule_id: Optional[UUID] = None

    @property
    def date(self) -> date:
        """Date of the first entry, used for ledger-wide ordering."""
        return self.entries[0].date

    def involves_account(self, account_id: UUID) -> bool:
        return any(e.account_id == account_id for e in self.entries)

    def entry_for_account(self, account_id: UUID) -> Optional[Entry]:
        for entry in self.entries:
            if entry.account_id == account_id:
                return entry
        return None

    @property
    def is_reconciled(self) -> bool:
        return any(e.reconciled for e in self.entries)


@dataclass(frozen=True)
class ScheduleEntry:
    """Template for one entry of a scheduled transaction."""

    description: str
    account_id: UUID
    side: Side
    amount: Decimal


@dataclass(frozen=True)
class Modifier:
    """Shared compounding adjustment with its own recurrence.

    Every cycle adds ``amount`` plus ``percentage`` of the running amount.
    """

    id: UUID
    name: str
    period: Period
    frequency: int
    start_date: date
    amount: Decimal = Decimal("0")
    percentage: Decimal = Decimal("0")
    end_date: Optional[date] = None


@dataclass(frozen=True)
class ScheduleModifier:
    """Progress of one Modifier for one Schedule."""

    modifier_id: UUID
    cycle_count: int = 0
    last_date: Optional[date] = None


@dataclass(frozen=True)
class Schedule:
    """Recurring transaction template."""

    id: UUID
    name: str
    period: Period
    frequency: int
    start_date: date
    entries: tuple[ScheduleEntry, ...]
    end_date: Optional[date] = None
    last_date: Optional[date] = None
    modifiers: tuple[ScheduleModifier, ...] = ()


@dataclass(frozen=True)
class Settings:
    """Ledger-wide settings."""

    require_double_entry: bool = False


@dataclass(frozen=True)
class ReconciliationResult:
    """Verdict for one externally supplied transaction.

    ``expected_balance`` is the ledger's running balance at the matched
    transaction, or None when nothing matched.
    """

    transaction: Transaction
    status: ReconciliationStatus
    matched_transaction_id: Optional[UUID] = None
    expected_balance: Optional[Decimal] = None
