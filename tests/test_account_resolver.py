"""Tests for resolving accounts, schedules and modifiers by name or ID."""

import pytest
from datetime import date
from decimal import Decimal

from ledgerbooks.domain.entities import AccountType, Period
from ledgerbooks.domain.errors import NotFoundError, ValidationError
from ledgerbooks.domain.factories import new_account, new_modifier
from ledgerbooks.utils.account_resolver import (
    resolve_account,
    resolve_modifier,
)


def test_resolve_by_name(ledger, checking):
    assert resolve_account(ledger, "Checking") == checking.id


def test_resolve_by_full_id(ledger, checking):
    assert resolve_account(ledger, str(checking.id)) == checking.id


def test_resolve_by_id_prefix(ledger, checking):
    assert resolve_account(ledger, str(checking.id)[:8]) == checking.id


def test_short_prefix_rejected(ledger, checking):
    with pytest.raises(NotFoundError):
        resolve_account(ledger, str(checking.id)[:3])


def test_unknown_full_id(ledger, checking):
    with pytest.raises(NotFoundError):
        resolve_account(ledger, "00000000-0000-0000-0000-000000000000")


def test_unknown_name(ledger, checking):
    with pytest.raises(NotFoundError, match="not found"):
        resolve_account(ledger, "Nope")


def test_ambiguous_name(ledger, checking):
    ledger.add_account(new_account("Checking", AccountType.ASSET))
    with pytest.raises(ValidationError, match="ambiguous"):
        resolve_account(ledger, "Checking")


def test_resolve_modifier(ledger):
    modifier = new_modifier("Raise", Period.YEARS, 1, date(2024, 1, 1), amount=Decimal("5"))
    ledger.add_modifier(modifier)
    assert resolve_modifier(ledger, "Raise") == modifier.id
