"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the snapshot schema can change
without touching the domain. Computed entry balances are never mapped.
"""

from ledgerbooks.domain import entities as domain
from ledgerbooks.database.models import (
    Account as ORMAccount,
    Entry as ORMEntry,
    Modifier as ORMModifier,
    Schedule as ORMSchedule,
    ScheduleEntry as ORMScheduleEntry,
    ScheduleModifier as ORMScheduleModifier,
    Transaction as ORMTransaction,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    cutoff = None
    if orm_account.cutoff_transaction_id is not None:
        cutoff = domain.ReconciliationCutoff(
            date=orm_account.cutoff_date,
            balance=orm_account.cutoff_balance,
            transaction_id=orm_account.cutoff_transaction_id,
        )
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        account_type=orm_account.account_type,
        starting_balance=orm_account.starting_balance,
        reconciliation=cutoff,
    )


def account_to_orm(account: domain.Account, position: int) -> ORMAccount:
    cutoff = account.reconciliation
    return ORMAccount(
        id=account.id,
        position=position,
        name=account.name,
        account_type=account.account_type,
        starting_balance=account.starting_balance,
        cutoff_date=cutoff.date if cutoff else None,
        cutoff_balance=cutoff.balance if cutoff else None,
        cutoff_transaction_id=cutoff.transaction_id if cutoff else None,
    )


def entry_to_domain(orm_entry: ORMEntry) -> domain.Entry:
    """Convert SQLAlchemy Entry model to domain Entry entity."""
    return domain.Entry(
        id=orm_entry.id,
        transaction_id=orm_entry.transaction_id,
        date=orm_entry.date,
        description=orm_entry.description,
        account_id=orm_entry.account_id,
        side=orm_entry.side,
        amount=orm_entry.amount,
        reconciled=orm_entry.reconciled,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        entries=tuple(entry_to_domain(e) for e in orm_transaction.entries),
        status=orm_transaction.status,
        schedule_id=orm_transaction.schedule_id,
    )


def transaction_to_orm(transaction: domain.Transaction, position: int) -> ORMTransaction:
    return ORMTransaction(
        id=transaction.id,
        position=position,
        status=transaction.status,
        schedule_id=transaction.schedule_id,
        entries=[
            ORMEntry(
                id=entry.id,
                position=index,
                date=entry.date,
                description=entry.description,
                account_id=entry.account_id,
                side=entry.side,
                amount=entry.amount,
                reconciled=entry.reconciled,
            )
            for index, entry in enumerate(transaction.entries)
        ],
    )


def schedule_to_domain(orm_schedule: ORMSchedule) -> domain.Schedule:
    """Convert SQLAlchemy Schedule model to domain Schedule entity."""
    return domain.Schedule(
        id=orm_schedule.id,
        name=orm_schedule.name,
        period=orm_schedule.period,
        frequency=orm_schedule.frequency,
        start_date=orm_schedule.start_date,
        end_date=orm_schedule.end_date,
        last_date=orm_schedule.last_date,
        entries=tuple(
            domain.ScheduleEntry(
                description=e.description,
                account_id=e.account_id,
                side=e.side,
                amount=e.amount,
            )
            for e in orm_schedule.entries
        ),
        modifiers=tuple(
            domain.ScheduleModifier(
                modifier_id=m.modifier_id,
                cycle_count=m.cycle_count,
                last_date=m.last_date,
            )
            for m in orm_schedule.modifiers
        ),
    )


def schedule_to_orm(schedule: domain.Schedule, position: int) -> ORMSchedule:
    return ORMSchedule(
        id=schedule.id,
        position=position,
        name=schedule.name,
        period=schedule.period,
        frequency=schedule.frequency,
        start_date=schedule.start_date,
        end_date=schedule.end_date,
        last_date=schedule.last_date,
        entries=[
            ORMScheduleEntry(
                position=index,
                description=e.description,
                account_id=e.account_id,
                side=e.side,
                amount=e.amount,
            )
            for index, e in enumerate(schedule.entries)
        ],
        modifiers=[
            ORMScheduleModifier(
                position=index,
                modifier_id=m.modifier_id,
                cycle_count=m.cycle_count,
                last_date=m.last_date,
            )
            for index, m in enumerate(schedule.modifiers)
        ],
    )


def modifier_to_domain(orm_modifier: ORMModifier) -> domain.Modifier:
    """Convert SQLAlchemy Modifier model to domain Modifier entity."""
    return domain.Modifier(
        id=orm_modifier.id,
        name=orm_modifier.name,
        period=orm_modifier.period,
        frequency=orm_modifier.frequency,
        start_date=orm_modifier.start_date,
        end_date=orm_modifier.end_date,
        amount=orm_modifier.amount,
        percentage=orm_modifier.percentage,
    )


def modifier_to_orm(modifier: domain.Modifier, position: int) -> ORMModifier:
    return ORMModifier(
        id=modifier.id,
        position=position,
        name=modifier.name,
        period=modifier.period,
        frequency=modifier.frequency,
        start_date=modifier.start_date,
        end_date=modifier.end_date,
        amount=modifier.amount,
        percentage=modifier.percentage,
    )
