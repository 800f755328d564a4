"""Scheduler: materializes projected transactions from recurring schedules."""

import logging
from dataclasses import replace
from datetime import date
from typing import Mapping, Optional
from uuid import UUID, uuid4

from ledgerbooks.domain import errors
from ledgerbooks.domain.entities import (
    Entry,
    Modifier,
    Schedule,
    ScheduleEntry,
    Transaction,
    TransactionStatus,
)
from ledgerbooks.domain.errors import ConflictError, DependencyError, NotFoundError
from ledgerbooks.domain.modifier import advance_if_due, apply_modifier
from ledgerbooks.domain.recurrence import calculate_next_date

logger = logging.getLogger(__name__)


def next_schedule_date(schedule: Schedule) -> date:
    """Next occurrence of a schedule, defaulting to its start date."""
    if schedule.last_date is None:
        return schedule.start_date
    return calculate_next_date(
        schedule.last_date, schedule.period, schedule.frequency, schedule.start_date
    )


def schedule_next(
    schedule: Schedule, max_date: date, modifiers: Mapping[UUID, Modifier]
) -> tuple[Schedule, Optional[Transaction]]:
    """Advance a schedule by one occurrence.

    Modifier bindings advance whenever the next occurrence reaches their
    boundary, including the final check that emits nothing.

    Args:
        schedule: Schedule to advance
        max_date: Horizon; occurrences after it are not emitted
        modifiers: Modifier definitions by id (read only)

    Returns:
        Tuple of (updated schedule, emitted transaction or None)

    Raises:
        NotFoundError: If a binding references an unknown modifier
    """
    next_date = next_schedule_date(schedule)

    bindings = []
    for binding in schedule.modifiers:
        modifier = modifiers.get(binding.modifier_id)
        if modifier is None:
            raise NotFoundError(errors.modifier_not_found(binding.modifier_id))
        binding, boundary = advance_if_due(binding, modifier, next_date)
        if boundary is not None:
            logger.debug(
                "schedule %s: modifier %s advanced to cycle %d at %s",
                schedule.name,
                modifier.name,
                binding.cycle_count,
                boundary,
            )
        bindings.append(binding)
    schedule = replace(schedule, modifiers=tuple(bindings))

    if next_date > max_date or (schedule.end_date is not None and next_date > schedule.end_date):
        return schedule, None

    transaction_id = uuid4()
    entries = tuple(
        _build_entry(transaction_id, next_date, template, schedule, modifiers)
        for template in schedule.entries
    )
    transaction = Transaction(
        id=transaction_id,
        entries=entries,
        status=TransactionStatus.PROJECTED,
        schedule_id=schedule.id,
    )
    return replace(schedule, last_date=next_date), transaction


def _build_entry(
    transaction_id: UUID,
    entry_date: date,
    template: ScheduleEntry,
    schedule: Schedule,
    modifiers: Mapping[UUID, Modifier],
) -> Entry:
    amount = template.amount
    for binding in schedule.modifiers:
        amount = apply_modifier(modifiers[binding.modifier_id], amount, binding.cycle_count)
    return Entry(
        id=uuid4(),
        transaction_id=transaction_id,
        date=entry_date,
        description=template.description,
        account_id=template.account_id,
        side=template.side,
        amount=amount,
    )


class Scheduler:
    """Owns schedules, the shared modifier table and the generation horizon."""

    def __init__(
        self,
        schedules: Optional[list[Schedule]] = None,
        modifiers: Optional[dict[UUID, Modifier]] = None,
        end_date: Optional[date] = None,
    ):
        """Initialize scheduler.

        Args:
            schedules: Schedules in generation order
            modifiers: Modifier definitions by id
            end_date: Horizon of the last ``generate`` call
        """
        self._schedules: list[Schedule] = list(schedules or [])
        self._modifiers: dict[UUID, Modifier] = dict(modifiers or {})
        self.end_date = end_date

    # Schedule operations
    @property
    def schedules(self) -> list[Schedule]:
        return list(self._schedules)

    def get_schedule(self, schedule_id: UUID) -> Schedule:
        return self._schedules[self._schedule_index(schedule_id)]

    def find_schedule(self, schedule_id: UUID) -> Optional[Schedule]:
        for schedule in self._schedules:
            if schedule.id == schedule_id:
                return schedule
        return None

    def add_schedule(self, schedule: Schedule) -> None:
        if self.find_schedule(schedule.id) is not None:
            raise ConflictError(f"Schedule {schedule.id} already exists")
        self._schedules.append(schedule)

    def update_schedule(self, schedule: Schedule) -> None:
        self._schedules[self._schedule_index(schedule.id)] = schedule

    def remove_schedule(self, schedule_id: UUID) -> None:
        del self._schedules[self._schedule_index(schedule_id)]

    def reset_schedule(self, schedule_id: UUID) -> None:
        """Forget generation progress so the schedule restarts at its start date.

        Raises:
            KeyError: If the schedule does not exist. Callers must check first.
        """
        schedule = self.find_schedule(schedule_id)
        if schedule is None:
            raise KeyError(schedule_id)
        reset = replace(
            schedule,
            last_date=None,
            modifiers=tuple(replace(b, cycle_count=0, last_date=None) for b in schedule.modifiers),
        )
        self.update_schedule(reset)

    def _schedule_index(self, schedule_id: UUID) -> int:
        for index, schedule in enumerate(self._schedules):
            if schedule.id == schedule_id:
                return index
        raise NotFoundError(errors.schedule_not_found(schedule_id))

    # Modifier operations
    @property
    def modifiers(self) -> dict[UUID, Modifier]:
        return dict(self._modifiers)

    def get_modifier(self, modifier_id: UUID) -> Modifier:
        modifier = self._modifiers.get(modifier_id)
        if modifier is None:
            raise NotFoundError(errors.modifier_not_found(modifier_id))
        return modifier

    def add_modifier(self, modifier: Modifier) -> None:
        if modifier.id in self._modifiers:
            raise ConflictError(f"Modifier {modifier.id} already exists")
        self._modifiers[modifier.id] = modifier

    def update_modifier(self, modifier: Modifier) -> None:
        self.get_modifier(modifier.id)
        self._modifiers[modifier.id] = modifier

    def remove_modifier(self, modifier_id: UUID) -> None:
        self.get_modifier(modifier_id)
        bound = [
            s for s in self._schedules if any(b.modifier_id == modifier_id for b in s.modifiers)
        ]
        if bound:
            raise DependencyError(
                f"Cannot delete modifier {modifier_id}: it is bound to "
                f"{len(bound)} schedule{'s' if len(bound) != 1 else ''}"
            )
        del self._modifiers[modifier_id]

    # Generation
    def generate(self, end_date: date) -> list[Transaction]:
        """Materialize every schedule up to ``end_date``.

        Returns:
            Projected transactions ordered by date; same-day transactions keep
            the order of their schedules
        """
        self.end_date = end_date
        transactions: list[Transaction] = []
        for index in range(len(self._schedules)):
            transactions.extend(self._run(index, end_date))
        transactions.sort(key=lambda t: t.date)
        logger.info("generated %d transactions up to %s", len(transactions), end_date)
        return transactions

    def generate_by_schedule(self, end_date: date, schedule_id: UUID) -> list[Transaction]:
        """Materialize a single schedule without moving the horizon."""
        transactions = self._run(self._schedule_index(schedule_id), end_date)
        logger.info(
            "generated %d transactions for schedule %s up to %s",
            len(transactions),
            schedule_id,
            end_date,
        )
        return transactions

    def restore(self, schedules: list[Schedule], end_date: Optional[date]) -> None:
        """Put back schedule progress and horizon taken before a rejected run."""
        self._schedules = list(schedules)
        self.end_date = end_date

    def _run(self, index: int, end_date: date) -> list[Transaction]:
        transactions = []
        while True:
            schedule, transaction = schedule_next(self._schedules[index], end_date, self._modifiers)
            self._schedules[index] = schedule
            if transaction is None:
                return transactions
            transactions.append(transaction)
