"""Factory functions for new domain entities."""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional
from uuid import UUID, uuid4

from ledgerbooks.domain.entities import (
    Account,
    AccountType,
    Entry,
    Modifier,
    Period,
    Schedule,
    ScheduleEntry,
    ScheduleModifier,
    Side,
    Transaction,
    TransactionStatus,
)


def new_account(name: str, account_type: AccountType) -> Account:
    """Create an account with a zero starting balance and no cutoff."""
    return Account(id=uuid4(), name=name, account_type=account_type)


def new_transaction(
    lines: Iterable[tuple[UUID, Side, Decimal]],
    entry_date: date,
    description: str = "",
    status: TransactionStatus = TransactionStatus.RECORDED,
) -> Transaction:
    """Create a transaction from (account_id, side, amount) lines sharing one date."""
    transaction_id = uuid4()
    entries = tuple(
        Entry(
            id=uuid4(),
            transaction_id=transaction_id,
            date=entry_date,
            description=description,
            account_id=account_id,
            side=side,
            amount=amount,
        )
        for account_id, side, amount in lines
    )
    return Transaction(id=transaction_id, entries=entries, status=status)


def new_transfer(
    debit_account_id: UUID,
    credit_account_id: UUID,
    amount: Decimal,
    entry_date: date,
    description: str = "",
) -> Transaction:
    """Create a balanced two-entry transaction."""
    return new_transaction(
        [
            (debit_account_id, Side.DEBIT, amount),
            (credit_account_id, Side.CREDIT, amount),
        ],
        entry_date,
        description,
    )


def new_schedule(
    name: str,
    period: Period,
    frequency: int,
    start_date: date,
    entries: Iterable[ScheduleEntry],
    end_date: Optional[date] = None,
    modifier_ids: Iterable[UUID] = (),
) -> Schedule:
    """Create a schedule that has not generated anything yet."""
    return Schedule(
        id=uuid4(),
        name=name,
        period=period,
        frequency=frequency,
        start_date=start_date,
        entries=tuple(entries),
        end_date=end_date,
        modifiers=tuple(ScheduleModifier(modifier_id=m) for m in modifier_ids),
    )


def new_modifier(
    name: str,
    period: Period,
    frequency: int,
    start_date: date,
    amount: Decimal = Decimal("0"),
    percentage: Decimal = Decimal("0"),
    end_date: Optional[date] = None,
) -> Modifier:
    return Modifier(
        id=uuid4(),
        name=name,
        period=period,
        frequency=frequency,
        start_date=start_date,
        amount=amount,
        percentage=percentage,
        end_date=end_date,
    )
