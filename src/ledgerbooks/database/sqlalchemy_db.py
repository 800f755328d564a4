"""SQLAlchemy snapshot store implementation."""

import logging

from sqlalchemy.exc import SQLAlchemyError

from ledgerbooks.database.base import BookRepository
from ledgerbooks.database.mappers import (
    account_to_domain,
    account_to_orm,
    modifier_to_domain,
    modifier_to_orm,
    schedule_to_domain,
    schedule_to_orm,
    transaction_to_domain,
    transaction_to_orm,
)
from ledgerbooks.database.models import (
    SCHEMA_VERSION,
    Account,
    Books,
    Entry,
    Modifier,
    Schedule,
    ScheduleEntry,
    ScheduleModifier,
    Transaction,
    create_db_engine,
    create_schema,
    create_session_factory,
)
from ledgerbooks.database.upgrade import read_version, upgrade_snapshot
from ledgerbooks.domain.entities import Settings
from ledgerbooks.domain.errors import SnapshotError
from ledgerbooks.domain.ledger import Ledger
from ledgerbooks.domain.scheduler import Scheduler

logger = logging.getLogger(__name__)

# Children first, so a replace never leaves dangling references
_SNAPSHOT_MODELS = (
    ScheduleModifier,
    ScheduleEntry,
    Schedule,
    Modifier,
    Entry,
    Transaction,
    Account,
    Books,
)


class SQLAlchemyBookRepository(BookRepository):
    """SQLAlchemy-based implementation of BookRepository.

    Every ``load`` and ``save`` runs in its own session. ``save`` replaces
    the whole snapshot in one transaction.
    """

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy repository.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.engine = create_db_engine(database_url)
        self.session_factory = create_session_factory(self.engine)

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()

    def initialize_schema(self) -> None:
        """Create missing tables."""
        try:
            create_schema(self.engine)
        except SQLAlchemyError as e:
            raise SnapshotError(f"Could not initialize {self.database_url}: {e}") from e

    def load(self) -> Ledger:
        try:
            version = read_version(self.engine)
            if version is None:
                logger.info("no snapshot in %s, starting with empty books", self.database_url)
                return Ledger()
            if version != SCHEMA_VERSION:
                upgrade_snapshot(self.engine, version)
            return self._read_ledger()
        except SQLAlchemyError as e:
            raise SnapshotError(f"Could not read snapshot from {self.database_url}: {e}") from e

    def _read_ledger(self) -> Ledger:
        with self.session_factory() as session:
            books = session.query(Books).first()
            accounts = [
                account_to_domain(a) for a in session.query(Account).order_by(Account.position)
            ]
            transactions = [
                transaction_to_domain(t)
                for t in session.query(Transaction).order_by(Transaction.position)
            ]
            schedules = [
                schedule_to_domain(s) for s in session.query(Schedule).order_by(Schedule.position)
            ]
            modifiers = [
                modifier_to_domain(m) for m in session.query(Modifier).order_by(Modifier.position)
            ]

            logger.debug(
                "loaded %d accounts, %d transactions, %d schedules, %d modifiers",
                len(accounts),
                len(transactions),
                len(schedules),
                len(modifiers),
            )
            return Ledger(
                id=books.id,
                name=books.name,
                accounts=accounts,
                transactions=transactions,
                scheduler=Scheduler(
                    schedules=schedules,
                    modifiers={m.id: m for m in modifiers},
                    end_date=books.horizon_end_date,
                ),
                settings=Settings(require_double_entry=books.require_double_entry),
            )

    def save(self, ledger: Ledger) -> None:
        with self.session_factory() as session:
            try:
                for model in _SNAPSHOT_MODELS:
                    session.query(model).delete()

                session.add(
                    Books(
                        id=ledger.id,
                        name=ledger.name,
                        version=SCHEMA_VERSION,
                        require_double_entry=ledger.settings.require_double_entry,
                        horizon_end_date=ledger.scheduler.end_date,
                    )
                )
                session.add_all(
                    account_to_orm(a, index) for index, a in enumerate(ledger.accounts())
                )
                session.add_all(
                    modifier_to_orm(m, index) for index, m in enumerate(ledger.modifiers())
                )
                session.add_all(
                    schedule_to_orm(s, index) for index, s in enumerate(ledger.schedules())
                )
                session.add_all(
                    transaction_to_orm(t, index) for index, t in enumerate(ledger.transactions())
                )
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                raise SnapshotError(f"Could not save snapshot to {self.database_url}: {e}") from e

        logger.debug("saved snapshot to %s", self.database_url)
