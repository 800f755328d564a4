"""Domain layer for ledgerbooks."""

from ledgerbooks.domain.ledger import Ledger
from ledgerbooks.domain.scheduler import Scheduler
from ledgerbooks.domain.statement_import import import_statement

__all__ = [
    "Ledger",
    "Scheduler",
    "import_statement",
]
