"""Resolve accounts and schedules by name or ID."""

from typing import Callable, Iterable, TypeVar
from uuid import UUID

from ledgerbooks.domain.errors import NotFoundError, ValidationError
from ledgerbooks.domain.ledger import Ledger

T = TypeVar("T")


def _resolve(
    items: Iterable[T],
    value: str,
    kind: str,
    name_of: Callable[[T], str],
    id_of: Callable[[T], UUID],
) -> UUID:
    items = list(items)
    value = value.strip()

    try:
        candidate = UUID(value)
    except ValueError:
        candidate = None
    if candidate is not None:
        for item in items:
            if id_of(item) == candidate:
                return candidate
        raise NotFoundError(f"{kind} {candidate} not found")

    by_name = [item for item in items if name_of(item) == value]
    if len(by_name) == 1:
        return id_of(by_name[0])
    if len(by_name) > 1:
        raise ValidationError(f"{kind} name '{value}' is ambiguous; use its ID")

    # Unambiguous ID prefix, as printed by list commands
    by_prefix = [item for item in items if str(id_of(item)).startswith(value.lower())]
    if len(by_prefix) == 1 and len(value) >= 4:
        return id_of(by_prefix[0])
    raise NotFoundError(f"{kind} '{value}' not found")


def resolve_account(ledger: Ledger, account: str) -> UUID:
    """Resolve an account name, ID or ID prefix to an account ID.

    Args:
        ledger: Ledger to search
        account: Account name, ID or unique ID prefix

    Returns:
        Account ID

    Raises:
        NotFoundError: If no account matches
        ValidationError: If the name matches several accounts
    """
    return _resolve(ledger.accounts(), account, "Account", lambda a: a.name, lambda a: a.id)


def resolve_schedule(ledger: Ledger, schedule: str) -> UUID:
    """Resolve a schedule name, ID or ID prefix to a schedule ID."""
    return _resolve(ledger.schedules(), schedule, "Schedule", lambda s: s.name, lambda s: s.id)


def resolve_modifier(ledger: Ledger, modifier: str) -> UUID:
    """Resolve a modifier name, ID or ID prefix to a modifier ID."""
    return _resolve(ledger.modifiers(), modifier, "Modifier", lambda m: m.name, lambda m: m.id)
