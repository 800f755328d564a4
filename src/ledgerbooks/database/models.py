"""SQLAlchemy models for the ledgerbooks snapshot store."""

from decimal import Decimal
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    Date,
    Boolean,
    Enum,
    TypeDecorator,
    Uuid,
    create_engine,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

from ledgerbooks.domain.entities import AccountType, Period, Side, TransactionStatus

# Bump together with a new entry in ledgerbooks.database.upgrade.UPGRADES
SCHEMA_VERSION = 2

Base = declarative_base()


class DecimalString(TypeDecorator):
    """Stores Decimal as text so amounts survive SQLite without float rounding."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return None if value is None else str(value)

    def process_result_value(self, value, dialect):
        return None if value is None else Decimal(value)


class Books(Base):
    """Ledger header row. A snapshot holds exactly one."""

    __tablename__ = "books"

    id = Column(Uuid, primary_key=True)
    name = Column(String, nullable=False, default="")
    version = Column(Integer, nullable=False)
    require_double_entry = Column(Boolean, default=False, nullable=False)
    horizon_end_date = Column(Date, nullable=True)


class Account(Base):
    """Ledger account model."""

    __tablename__ = "accounts"

    id = Column(Uuid, primary_key=True)
    position = Column(Integer, nullable=False)
    name = Column(String, nullable=False)
    account_type = Column(Enum(AccountType, native_enum=False), nullable=False)
    starting_balance = Column(DecimalString, nullable=False)
    cutoff_date = Column(Date, nullable=True)
    cutoff_balance = Column(DecimalString, nullable=True)
    cutoff_transaction_id = Column(Uuid, nullable=True)


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Uuid, primary_key=True)
    position = Column(Integer, nullable=False)
    status = Column(Enum(TransactionStatus, native_enum=False), nullable=False)
    schedule_id = Column(Uuid, nullable=True)

    # Relationships
    entries = relationship(
        "Entry",
        back_populates="transaction",
        cascade="all, delete-orphan",
        order_by="Entry.position",
    )


class Entry(Base):
    """Entry model."""

    __tablename__ = "entries"

    id = Column(Uuid, primary_key=True)
    transaction_id = Column(Uuid, ForeignKey("transactions.id"), nullable=False)
    position = Column(Integer, nullable=False)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False, default="")
    account_id = Column(Uuid, nullable=False)
    side = Column(Enum(Side, native_enum=False), nullable=False)
    amount = Column(DecimalString, nullable=False)
    reconciled = Column(Boolean, default=False, nullable=False)

    # Relationships
    transaction = relationship("Transaction", back_populates="entries")


class Schedule(Base):
    """Recurring schedule model."""

    __tablename__ = "schedules"

    id = Column(Uuid, primary_key=True)
    position = Column(Integer, nullable=False)
    name = Column(String, nullable=False)
    period = Column(Enum(Period, native_enum=False), nullable=False)
    frequency = Column(Integer, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    last_date = Column(Date, nullable=True)

    # Relationships
    entries = relationship(
        "ScheduleEntry",
        back_populates="schedule",
        cascade="all, delete-orphan",
        order_by="ScheduleEntry.position",
    )
    modifiers = relationship(
        "ScheduleModifier",
        back_populates="schedule",
        cascade="all, delete-orphan",
        order_by="ScheduleModifier.position",
    )


class ScheduleEntry(Base):
    """Schedule entry template model."""

    __tablename__ = "schedule_entries"

    id = Column(Integer, primary_key=True)
    schedule_id = Column(Uuid, ForeignKey("schedules.id"), nullable=False)
    position = Column(Integer, nullable=False)
    description = Column(String, nullable=False, default="")
    account_id = Column(Uuid, nullable=False)
    side = Column(Enum(Side, native_enum=False), nullable=False)
    amount = Column(DecimalString, nullable=False)

    # Relationships
    schedule = relationship("Schedule", back_populates="entries")


class ScheduleModifier(Base):
    """Per-schedule modifier progress model."""

    __tablename__ = "schedule_modifiers"

    id = Column(Integer, primary_key=True)
    schedule_id = Column(Uuid, ForeignKey("schedules.id"), nullable=False)
    position = Column(Integer, nullable=False)
    modifier_id = Column(Uuid, ForeignKey("modifiers.id"), nullable=False)
    cycle_count = Column(Integer, default=0, nullable=False)
    last_date = Column(Date, nullable=True)

    # Relationships
    schedule = relationship("Schedule", back_populates="modifiers")


class Modifier(Base):
    """Shared compounding modifier model."""

    __tablename__ = "modifiers"

    id = Column(Uuid, primary_key=True)
    position = Column(Integer, nullable=False)
    name = Column(String, nullable=False)
    period = Column(Enum(Period, native_enum=False), nullable=False)
    frequency = Column(Integer, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    amount = Column(DecimalString, nullable=False)
    percentage = Column(DecimalString, nullable=False)


def create_db_engine(database_url: str) -> Engine:
    """Create a SQLAlchemy engine."""
    return create_engine(database_url, echo=False)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory bound to ``engine``."""
    return sessionmaker(bind=engine)


def create_schema(engine: Engine) -> None:
    """Create any missing tables. Existing tables are left as they are."""
    Base.metadata.create_all(engine)
