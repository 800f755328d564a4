"""Statement reconciliation.

External transactions (typically imported from a bank statement) are matched
one by one, oldest first, against the ledger's own transactions for the same
account. Each ledger transaction can satisfy at most one external one.

Matching is tiered:

1. Matched: same date, amount, side and running balance.
2. Otherwise the first remaining candidate agreeing on at least two of
   (date within a day, amount, description) is consumed and reported as
   PartialMatch, or Mismatch when the running balances disagree.
3. Otherwise Unmatched.

A Matched or PartialMatch result promotes the run of Mismatch results
directly before it to PartialMatch: the balances have realigned, so the
earlier drift is excused. An Unmatched result ends the run.
"""

import logging
from dataclasses import replace
from datetime import timedelta
from decimal import Decimal
from typing import Iterable, Optional

from ledgerbooks.domain.balance import account_transactions
from ledgerbooks.domain.entities import (
    Account,
    Entry,
    ReconciliationResult,
    ReconciliationStatus,
    Transaction,
)

logger = logging.getLogger(__name__)

DATE_TOLERANCE = timedelta(days=1)
FUZZY_THRESHOLD = 2


def _balances_agree(ledger_balance: Optional[Decimal], reported: Optional[Decimal]) -> bool:
    # Statements without a balance column cannot contradict the ledger
    return reported is None or ledger_balance == reported


def _is_exact(ledger: Entry, external: Entry) -> bool:
    return (
        ledger.date == external.date
        and ledger.amount == external.amount
        and ledger.side == external.side
        and _balances_agree(ledger.balance, external.balance)
    )


def _fuzzy_score(ledger: Entry, external: Entry) -> int:
    return sum(
        (
            abs(ledger.date - external.date) <= DATE_TOLERANCE,
            ledger.amount == external.amount,
            ledger.description == external.description,
        )
    )


def _match(
    external: Entry, candidates: list[Transaction], consumed: set[int], account: Account
) -> tuple[ReconciliationStatus, Optional[int]]:
    for index, candidate in enumerate(candidates):
        if index in consumed:
            continue
        if _is_exact(candidate.entry_for_account(account.id), external):
            return ReconciliationStatus.MATCHED, index

    for index, candidate in enumerate(candidates):
        if index in consumed:
            continue
        entry = candidate.entry_for_account(account.id)
        if _fuzzy_score(entry, external) >= FUZZY_THRESHOLD:
            if _balances_agree(entry.balance, external.balance):
                return ReconciliationStatus.PARTIAL_MATCH, index
            return ReconciliationStatus.MISMATCH, index

    return ReconciliationStatus.UNMATCHED, None


def promote_realigned(results: list[ReconciliationResult]) -> list[ReconciliationResult]:
    """Promote Mismatch runs that are followed by a realigned result."""
    promoted = list(results)
    pending: list[int] = []
    for index, result in enumerate(promoted):
        if result.status is ReconciliationStatus.MISMATCH:
            pending.append(index)
        elif result.status is ReconciliationStatus.UNMATCHED:
            pending.clear()
        else:
            for mismatch in pending:
                promoted[mismatch] = replace(
                    promoted[mismatch], status=ReconciliationStatus.PARTIAL_MATCH
                )
            pending.clear()
    return promoted


def reconcile(
    account: Account,
    ledger_transactions: Iterable[Transaction],
    external_transactions: Iterable[Transaction],
) -> list[ReconciliationResult]:
    """Classify external transactions against the ledger for one account.

    Args:
        account: Account being reconciled
        ledger_transactions: All ledger transactions (any account)
        external_transactions: Statement transactions; those not touching the
            account are ignored

    Returns:
        One result per relevant external transaction, oldest first
    """
    external = [t for t in external_transactions if t.involves_account(account.id)]
    external.sort(key=lambda t: t.entry_for_account(account.id).date)
    candidates = account_transactions(account, ledger_transactions)

    consumed: set[int] = set()
    results = []
    for transaction in external:
        status, index = _match(
            transaction.entry_for_account(account.id), candidates, consumed, account
        )
        if index is None:
            results.append(ReconciliationResult(transaction=transaction, status=status))
            continue
        consumed.add(index)
        matched = candidates[index]
        results.append(
            ReconciliationResult(
                transaction=transaction,
                status=status,
                matched_transaction_id=matched.id,
                expected_balance=matched.entry_for_account(account.id).balance,
            )
        )

    results = promote_realigned(results)
    logger.info(
        "reconciled %d statement transactions for account %s: %s",
        len(results),
        account.name,
        ", ".join(
            f"{status.value}={sum(1 for r in results if r.status is status)}"
            for status in ReconciliationStatus
        ),
    )
    return results
