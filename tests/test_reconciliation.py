"""Tests for statement reconciliation."""

import pytest
from datetime import date
from decimal import Decimal
from uuid import uuid4

from ledgerbooks.domain.entities import (
    Entry,
    ReconciliationResult,
    ReconciliationStatus,
    Side,
    Transaction,
)
from ledgerbooks.domain.factories import new_transfer
from ledgerbooks.domain.reconciliation import promote_realigned

MATCHED = ReconciliationStatus.MATCHED
PARTIAL = ReconciliationStatus.PARTIAL_MATCH
MISMATCH = ReconciliationStatus.MISMATCH
UNMATCHED = ReconciliationStatus.UNMATCHED


def external(account, on, description, side, amount, balance=None):
    """A one-entry statement transaction."""
    transaction_id = uuid4()
    return Transaction(
        id=transaction_id,
        entries=(
            Entry(
                id=uuid4(),
                transaction_id=transaction_id,
                date=on,
                description=description,
                account_id=account.id,
                side=side,
                amount=Decimal(amount),
                balance=None if balance is None else Decimal(balance),
            ),
        ),
    )


@pytest.fixture
def books(ledger, checking, salary, groceries):
    """Checking balances 1000, 800, 750 after three transactions."""
    pay = new_transfer(checking.id, salary.id, Decimal("1000"), date(2024, 1, 1), "Salary")
    shop = new_transfer(groceries.id, checking.id, Decimal("200"), date(2024, 1, 5), "Groceries")
    snack = new_transfer(groceries.id, checking.id, Decimal("50"), date(2024, 1, 10), "Snacks")
    for t in (pay, shop, snack):
        ledger.add_transaction(t)
    return pay, shop, snack


def statuses(results):
    return [r.status for r in results]


class TestReconcile:
    def test_exact_match(self, ledger, checking, books):
        pay, _, _ = books
        ext = external(checking, date(2024, 1, 1), "PAYROLL", Side.DEBIT, "1000", "1000")

        (result,) = ledger.reconcile(checking.id, [ext])

        assert result.status is MATCHED
        assert result.transaction == ext
        assert result.matched_transaction_id == pay.id
        assert result.expected_balance == Decimal("1000")

    def test_exact_match_without_statement_balance(self, ledger, checking, books):
        ext = external(checking, date(2024, 1, 1), "PAYROLL", Side.DEBIT, "1000")
        assert statuses(ledger.reconcile(checking.id, [ext])) == [MATCHED]

    def test_partial_match(self, ledger, checking, books):
        _, shop, _ = books
        ext = external(checking, date(2024, 1, 6), "Groceries", Side.CREDIT, "200")

        (result,) = ledger.reconcile(checking.id, [ext])

        assert result.status is PARTIAL
        assert result.matched_transaction_id == shop.id
        assert result.expected_balance == Decimal("800")

    def test_mismatch(self, ledger, checking, books):
        _, shop, _ = books
        ext = external(checking, date(2024, 1, 5), "GROCER", Side.CREDIT, "200", "900")

        (result,) = ledger.reconcile(checking.id, [ext])

        assert result.status is MISMATCH
        assert result.matched_transaction_id == shop.id
        assert result.expected_balance == Decimal("800")

    def test_unmatched(self, ledger, checking, books):
        ext = external(checking, date(2024, 3, 1), "Unknown", Side.CREDIT, "999")

        (result,) = ledger.reconcile(checking.id, [ext])

        assert result.status is UNMATCHED
        assert result.matched_transaction_id is None
        assert result.expected_balance is None

    def test_one_fuzzy_criterion_is_not_enough(self, ledger, checking, books):
        ext = external(checking, date(2024, 2, 20), "Other", Side.CREDIT, "200")
        assert statuses(ledger.reconcile(checking.id, [ext])) == [UNMATCHED]

    def test_ledger_transaction_used_once(self, ledger, checking, books):
        exts = [
            external(checking, date(2024, 1, 1), "PAYROLL", Side.DEBIT, "1000", "1000"),
            external(checking, date(2024, 1, 1), "PAYROLL", Side.DEBIT, "1000", "1000"),
        ]
        assert statuses(ledger.reconcile(checking.id, exts)) == [MATCHED, UNMATCHED]

    def test_realigned_balance_promotes_mismatch(self, ledger, checking, books):
        exts = [
            external(checking, date(2024, 1, 5), "GROCER", Side.CREDIT, "200", "900"),
            external(checking, date(2024, 1, 10), "SNACKS", Side.CREDIT, "50", "750"),
        ]
        assert statuses(ledger.reconcile(checking.id, exts)) == [PARTIAL, MATCHED]

    def test_unmatched_ends_mismatch_run(self, ledger, checking, books):
        exts = [
            external(checking, date(2024, 1, 5), "GROCER", Side.CREDIT, "200", "900"),
            external(checking, date(2024, 1, 7), "Unknown", Side.CREDIT, "999"),
            external(checking, date(2024, 1, 10), "SNACKS", Side.CREDIT, "50", "750"),
        ]
        assert statuses(ledger.reconcile(checking.id, exts)) == [MISMATCH, UNMATCHED, MATCHED]

    def test_results_oldest_first(self, ledger, checking, books):
        exts = [
            external(checking, date(2024, 1, 10), "SNACKS", Side.CREDIT, "50", "750"),
            external(checking, date(2024, 1, 1), "PAYROLL", Side.DEBIT, "1000", "1000"),
        ]

        results = ledger.reconcile(checking.id, exts)

        assert [r.transaction for r in results] == [exts[1], exts[0]]

    def test_other_accounts_ignored(self, ledger, checking, salary, books):
        ext = external(salary, date(2024, 1, 1), "PAYROLL", Side.CREDIT, "1000")
        assert ledger.reconcile(checking.id, [ext]) == []

    def test_reconcile_is_read_only(self, ledger, checking, books):
        before = ledger.transactions()
        ext = external(checking, date(2024, 1, 1), "PAYROLL", Side.DEBIT, "1000", "1000")

        ledger.reconcile(checking.id, [ext])

        assert ledger.transactions() == before
        assert ledger.get_account(checking.id).reconciliation is None


class TestPromoteRealigned:
    def result(self, status):
        return ReconciliationResult(transaction=None, status=status)

    @pytest.mark.parametrize(
        "given, expected",
        [
            ([MISMATCH, MISMATCH, MATCHED], [PARTIAL, PARTIAL, MATCHED]),
            ([MISMATCH, PARTIAL], [PARTIAL, PARTIAL]),
            ([MISMATCH, UNMATCHED, MATCHED], [MISMATCH, UNMATCHED, MATCHED]),
            ([MATCHED, MISMATCH], [MATCHED, MISMATCH]),
            ([], []),
        ],
    )
    def test_promotion(self, given, expected):
        promoted = promote_realigned([self.result(s) for s in given])
        assert statuses(promoted) == expected
