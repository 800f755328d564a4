"""Shared domain error messages and error types."""

from datetime import date
from uuid import UUID


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as a duplicate identifier."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class UnsupportedVersionError(DomainError):
    """Stored snapshot was written by a version this build cannot read."""


class SnapshotError(DomainError):
    """Stored snapshot could not be read or written."""


def account_not_found(account_id: UUID) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def transaction_not_found(transaction_id: UUID) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def schedule_not_found(schedule_id: UUID) -> str:
    """Return message for missing schedule."""
    return f"Schedule {schedule_id} not found"


def modifier_not_found(modifier_id: UUID) -> str:
    """Return message for missing modifier."""
    return f"Modifier {modifier_id} not found"


def invalid_account_reference(account_id: UUID) -> str:
    """Return message for an entry naming an unknown account."""
    return f"Invalid account reference: {account_id}"


def too_few_entries(required: int, actual: int) -> str:
    return (
        f"A transaction requires at least {required} "
        f"entr{'ies' if required != 1 else 'y'}, got {actual}"
    )


def entry_reconciled(transaction_id: UUID) -> str:
    return f"Transaction {transaction_id} has reconciled entries and cannot be changed"


def entry_before_cutoff(account_id: UUID, entry_date: date, cutoff_date: date) -> str:
    return (
        f"Entry dated {entry_date} is before the reconciliation cutoff "
        f"{cutoff_date} of account {account_id}"
    )


def delete_blocked(kind: str, entity_id: UUID, transaction_count: int, schedule_count: int = 0) -> str:
    """Return message when an entity still has dependent transactions or schedules."""
    parts = []
    if transaction_count > 0:
        parts.append(
            f"{transaction_count} transaction{'s' if transaction_count != 1 else ''}"
        )
    if schedule_count > 0:
        parts.append(f"{schedule_count} schedule{'s' if schedule_count != 1 else ''}")
    return (
        f"Cannot delete {kind} {entity_id}: it has {', '.join(parts)}. "
        "Please delete them first."
    )
