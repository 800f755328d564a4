"""Compounding modifiers and their per-schedule bindings."""

from dataclasses import replace
from datetime import date
from decimal import Decimal, ROUND_HALF_EVEN
from typing import Optional

from ledgerbooks.domain.entities import Modifier, ScheduleModifier
from ledgerbooks.domain.recurrence import calculate_next_date

DECIMAL_PRECISION = 4

_QUANTUM = Decimal(1).scaleb(-DECIMAL_PRECISION)


def round_amount(amount: Decimal) -> Decimal:
    """Round a monetary amount to the ledger precision."""
    return amount.quantize(_QUANTUM, rounding=ROUND_HALF_EVEN)


def apply_modifier(modifier: Modifier, amount: Decimal, cycle_count: int) -> Decimal:
    """Compound ``amount`` through ``cycle_count`` cycles of ``modifier``.

    Rounding happens once, after the last cycle.
    """
    for _ in range(cycle_count):
        amount = amount + modifier.amount + modifier.percentage * amount
    return round_amount(amount)


def modifier_next_date(modifier: Modifier, prev_date: date) -> date:
    """Next boundary of the modifier's own recurrence after ``prev_date``."""
    return calculate_next_date(prev_date, modifier.period, modifier.frequency, modifier.start_date)


def binding_next_date(binding: ScheduleModifier, modifier: Modifier) -> date:
    """Next date at which ``binding`` advances.

    A binding that never advanced counts from the modifier's start date.
    """
    prev_date = binding.last_date if binding.last_date is not None else modifier.start_date
    return modifier_next_date(modifier, prev_date)


def advance_binding(binding: ScheduleModifier, new_last_date: date) -> ScheduleModifier:
    return replace(binding, cycle_count=binding.cycle_count + 1, last_date=new_last_date)


def advance_if_due(
    binding: ScheduleModifier, modifier: Modifier, occurrence: date
) -> tuple[ScheduleModifier, Optional[date]]:
    """Advance ``binding`` when ``occurrence`` has reached its next boundary.

    Returns:
        Tuple of (binding, boundary date it advanced to or None)
    """
    boundary = binding_next_date(binding, modifier)
    if occurrence < boundary:
        return binding, None
    if modifier.end_date is not None and boundary > modifier.end_date:
        return binding, None
    return advance_binding(binding, boundary), boundary
