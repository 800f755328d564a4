"""Ledger aggregate: the books.

The Ledger owns accounts, transactions, the scheduler and settings, and is the
only mutation surface for them. Every mutating method validates first and
applies afterwards, so a rejected call leaves the ledger unchanged.
"""

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Optional
from uuid import UUID, uuid4

from ledgerbooks.domain import balance, errors, reconciliation
from ledgerbooks.domain.entities import (
    Account,
    Entry,
    Modifier,
    ReconciliationCutoff,
    ReconciliationResult,
    Schedule,
    Settings,
    Transaction,
)
from ledgerbooks.domain.errors import (
    ConflictError,
    DependencyError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from ledgerbooks.domain.scheduler import Scheduler

logger = logging.getLogger(__name__)


class Ledger:
    """Accounts, transactions and schedules of one set of books."""

    def __init__(
        self,
        id: Optional[UUID] = None,
        name: str = "",
        accounts: Optional[Iterable[Account]] = None,
        transactions: Optional[Iterable[Transaction]] = None,
        scheduler: Optional[Scheduler] = None,
        settings: Optional[Settings] = None,
    ):
        """Initialize a ledger from already validated state.

        Args:
            id: Ledger ID (generated if None)
            name: Ledger name
            accounts: Accounts in insertion order
            transactions: Transactions in insertion order
            scheduler: Scheduler holding schedules and modifiers
            settings: Ledger settings
        """
        self.id = id if id is not None else uuid4()
        self.name = name
        self._accounts: dict[UUID, Account] = {a.id: a for a in accounts or []}
        self._transactions: list[Transaction] = list(transactions or [])
        self.scheduler = scheduler if scheduler is not None else Scheduler()
        self.settings = settings if settings is not None else Settings()

    # Account operations
    def accounts(self) -> list[Account]:
        """List accounts in insertion order."""
        return list(self._accounts.values())

    def get_account(self, account_id: UUID) -> Account:
        account = self._accounts.get(account_id)
        if account is None:
            raise NotFoundError(errors.account_not_found(account_id))
        return account

    def add_account(self, account: Account) -> None:
        """Add an account.

        Adding an id that already exists is a no-op. Any supplied
        reconciliation cutoff is dropped: cutoffs come only from
        ``reconcile_account``.
        """
        if account.id in self._accounts:
            logger.debug("account %s already exists, ignoring add", account.id)
            return
        self._accounts[account.id] = replace(account, reconciliation=None)
        logger.info("added account %s (%s)", account.name, account.id)

    def update_account(self, account: Account) -> None:
        """Replace an account's editable fields.

        Raises:
            NotFoundError: If the account does not exist
            ValidationError: If the cutoff differs from the stored one, the type
                changes while transactions reference the account, or the
                starting balance changes after a cutoff was committed
        """
        current = self.get_account(account.id)
        if account.reconciliation != current.reconciliation:
            raise ValidationError(
                f"Reconciliation cutoff of account {account.id} can only be changed by reconciling"
            )
        if account.account_type != current.account_type and self._account_transaction_count(account.id):
            raise ValidationError(
                f"Cannot change the type of account {account.id}: it has transactions"
            )
        if account.starting_balance != current.starting_balance and current.reconciliation is not None:
            raise ValidationError(
                f"Cannot change the starting balance of account {account.id}: it has been reconciled"
            )
        self._accounts[account.id] = account

    def delete_account(self, account_id: UUID) -> None:
        self.get_account(account_id)
        transaction_count = self._account_transaction_count(account_id)
        schedule_count = sum(
            1
            for s in self.scheduler.schedules
            if any(e.account_id == account_id for e in s.entries)
        )
        if transaction_count or schedule_count:
            raise DependencyError(
                errors.delete_blocked("account", account_id, transaction_count, schedule_count)
            )
        del self._accounts[account_id]

    def _account_transaction_count(self, account_id: UUID) -> int:
        return sum(1 for t in self._transactions if t.involves_account(account_id))

    # Transaction operations
    def transactions(self) -> list[Transaction]:
        """List transactions in insertion order."""
        return list(self._transactions)

    def list_transactions(self) -> list[Transaction]:
        """List transactions ordered by date."""
        return balance.sort_by_date(self._transactions)

    def get_transaction(self, transaction_id: UUID) -> Transaction:
        return self._transactions[self._transaction_index(transaction_id)]

    def add_transaction(self, transaction: Transaction) -> None:
        """Record a transaction.

        Raises:
            ConflictError: If the transaction id already exists
            ValidationError: If the transaction breaks a ledger invariant
        """
        if any(t.id == transaction.id for t in self._transactions):
            raise ConflictError(f"Transaction {transaction.id} already exists")
        transaction = self._validate_transaction(transaction)
        self._transactions.append(transaction)

    def update_transaction(self, transaction: Transaction) -> None:
        """Replace a stored transaction, keeping its position.

        Raises:
            NotFoundError: If the transaction does not exist
            ValidationError: If either version is reconciled or the new one
                breaks a ledger invariant
        """
        index = self._transaction_index(transaction.id)
        if self._transactions[index].is_reconciled:
            raise ValidationError(errors.entry_reconciled(transaction.id))
        transaction = self._validate_transaction(transaction)
        self._transactions[index] = transaction

    def delete_transaction(self, transaction_id: UUID) -> None:
        index = self._transaction_index(transaction_id)
        if self._transactions[index].is_reconciled:
            raise ValidationError(errors.entry_reconciled(transaction_id))
        del self._transactions[index]

    def _transaction_index(self, transaction_id: UUID) -> int:
        for index, transaction in enumerate(self._transactions):
            if transaction.id == transaction_id:
                return index
        raise NotFoundError(errors.transaction_not_found(transaction_id))

    def _validate_transaction(self, transaction: Transaction) -> Transaction:
        entries = tuple(transaction.entries)
        required = 2 if self.settings.require_double_entry else 1
        if len(entries) < required:
            raise ValidationError(errors.too_few_entries(required, len(entries)))

        for entry in entries:
            if entry.transaction_id != transaction.id:
                raise ValidationError(
                    f"Entry {entry.id} belongs to transaction {entry.transaction_id}, not {transaction.id}"
                )
            account = self._accounts.get(entry.account_id)
            if account is None:
                raise ValidationError(errors.invalid_account_reference(entry.account_id))
            if entry.reconciled:
                raise ValidationError(errors.entry_reconciled(transaction.id))
            if entry.amount < 0:
                raise ValidationError(f"Entry {entry.id} has a negative amount: {entry.amount}")
            cutoff = account.reconciliation
            if cutoff is not None and entry.date < cutoff.date:
                raise ValidationError(
                    errors.entry_before_cutoff(account.id, entry.date, cutoff.date)
                )

        # Stored entries never carry a computed balance
        entries = tuple(replace(e, balance=None) for e in entries)
        return replace(transaction, entries=entries)

    # Schedule operations
    def schedules(self) -> list[Schedule]:
        return self.scheduler.schedules

    def get_schedule(self, schedule_id: UUID) -> Schedule:
        return self.scheduler.get_schedule(schedule_id)

    def add_schedule(self, schedule: Schedule) -> None:
        schedule = self._validate_schedule(schedule)
        self.scheduler.add_schedule(schedule)

    def update_schedule(self, schedule: Schedule) -> None:
        self.scheduler.get_schedule(schedule.id)
        schedule = self._validate_schedule(schedule)
        self.scheduler.update_schedule(schedule)

    def delete_schedule(self, schedule_id: UUID) -> None:
        self.scheduler.get_schedule(schedule_id)
        transaction_count = sum(1 for t in self._transactions if t.schedule_id == schedule_id)
        if transaction_count:
            raise DependencyError(errors.delete_blocked("schedule", schedule_id, transaction_count))
        self.scheduler.remove_schedule(schedule_id)

    def _validate_schedule(self, schedule: Schedule) -> Schedule:
        entries = tuple(schedule.entries)
        if not entries:
            raise ValidationError(f"Schedule '{schedule.name}' has no entries")
        required = 2 if self.settings.require_double_entry else 1
        if len(entries) < required:
            raise ValidationError(errors.too_few_entries(required, len(entries)))
        if schedule.frequency < 1:
            raise ValidationError(
                f"Schedule '{schedule.name}' frequency must be at least 1, got {schedule.frequency}"
            )
        for entry in entries:
            if entry.account_id not in self._accounts:
                raise ValidationError(errors.invalid_account_reference(entry.account_id))
        modifiers = self.scheduler.modifiers
        for binding in schedule.modifiers:
            if binding.modifier_id not in modifiers:
                raise ValidationError(errors.modifier_not_found(binding.modifier_id))
        return replace(schedule, entries=entries, modifiers=tuple(schedule.modifiers))

    # Modifier operations
    def modifiers(self) -> list[Modifier]:
        return list(self.scheduler.modifiers.values())

    def add_modifier(self, modifier: Modifier) -> None:
        if modifier.frequency < 1:
            raise ValidationError(
                f"Modifier '{modifier.name}' frequency must be at least 1, got {modifier.frequency}"
            )
        self.scheduler.add_modifier(modifier)

    def update_modifier(self, modifier: Modifier) -> None:
        if modifier.frequency < 1:
            raise ValidationError(
                f"Modifier '{modifier.name}' frequency must be at least 1, got {modifier.frequency}"
            )
        self.scheduler.update_modifier(modifier)

    def delete_modifier(self, modifier_id: UUID) -> None:
        self.scheduler.remove_modifier(modifier_id)

    # Generation
    def generate(self, end_date: date) -> list[Transaction]:
        """Project every schedule up to ``end_date`` and record the results.

        Raises:
            ValidationError: If a projected transaction breaks a ledger
                invariant (too few entries, entry before a reconciliation
                cutoff). Nothing is recorded and schedule progress is kept
                as it was.
        """
        return self._record_generated(lambda: self.scheduler.generate(end_date))

    def generate_by_schedule(self, end_date: date, schedule_id: UUID) -> list[Transaction]:
        """Project one schedule up to ``end_date`` without moving the horizon."""
        return self._record_generated(
            lambda: self.scheduler.generate_by_schedule(end_date, schedule_id)
        )

    def _record_generated(self, run: Callable[[], list[Transaction]]) -> list[Transaction]:
        schedules, horizon = self.scheduler.schedules, self.scheduler.end_date
        try:
            generated = [self._validate_transaction(t) for t in run()]
        except DomainError:
            self.scheduler.restore(schedules, horizon)
            raise
        self._transactions.extend(generated)
        return generated

    def update_settings(self, settings: Settings) -> None:
        self.settings = settings

    # Balances
    def account_transactions(self, account_id: UUID) -> list[Transaction]:
        """Copies of the account's transactions with running balances."""
        return balance.account_transactions(self.get_account(account_id), self._transactions)

    def account_entries(self, account_id: UUID) -> list[Entry]:
        """Copies of the account's entries with running balances."""
        return balance.account_entries(self.get_account(account_id), self._transactions)

    def account_balance(self, account_id: UUID) -> Decimal:
        return balance.closing_balance(self.get_account(account_id), self._transactions)

    # Reconciliation
    def reconcile(
        self, account_id: UUID, external_transactions: Iterable[Transaction]
    ) -> list[ReconciliationResult]:
        """Classify statement transactions against this ledger. Read only."""
        return reconciliation.reconcile(
            self.get_account(account_id), self._transactions, external_transactions
        )

    def reconcile_account(self, account_id: UUID, transaction_id: UUID) -> None:
        """Commit a reconciliation cutoff at ``transaction_id``.

        Cutoffs only move forward: committing at or before the current cutoff
        is a no-op. Every entry of the account up to and including the cutoff
        transaction is marked reconciled.

        Raises:
            NotFoundError: If the account does not exist or the transaction is
                not one of its transactions
            ValidationError: If the transaction has no computed balance
        """
        account = self.get_account(account_id)
        ordered = balance.account_transactions(account, self._transactions)
        positions = {t.id: index for index, t in enumerate(ordered)}
        position = positions.get(transaction_id)
        if position is None:
            raise NotFoundError(
                f"Transaction {transaction_id} not found for account {account_id}"
            )
        entry = ordered[position].entry_for_account(account_id)
        if entry.balance is None:
            raise ValidationError(f"Transaction {transaction_id} has no computed balance")

        if account.reconciliation is not None:
            current = positions.get(account.reconciliation.transaction_id)
            if current is not None and current >= position:
                logger.debug(
                    "account %s already reconciled through position %d", account_id, current
                )
                return

        cutoff = ReconciliationCutoff(
            date=entry.date, balance=entry.balance, transaction_id=transaction_id
        )
        reconciled_ids = {t.id for t in ordered[: position + 1]}
        for index, transaction in enumerate(self._transactions):
            if transaction.id in reconciled_ids:
                self._transactions[index] = replace(
                    transaction,
                    entries=tuple(
                        replace(e, reconciled=True) if e.account_id == account_id else e
                        for e in transaction.entries
                    ),
                )
        self._accounts[account_id] = replace(account, reconciliation=cutoff)
        logger.info(
            "account %s reconciled through %s (balance %s)",
            account.name,
            cutoff.date,
            cutoff.balance,
        )
