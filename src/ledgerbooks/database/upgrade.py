"""Snapshot schema upgrades.

Each upgrade step takes a snapshot written at one version to the next, in
place, before the ORM reads it. Steps are pure data transformations; the
domain never sees an old shape.

Version history:
- 1: no reconciliation (no cutoff columns on ``accounts``, no ``reconciled``
  flag on ``entries``) and no ``require_double_entry`` setting on ``books``.
- 2: current.
"""

import logging
from typing import Callable

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine

from ledgerbooks.database.models import SCHEMA_VERSION
from ledgerbooks.domain.errors import UnsupportedVersionError

logger = logging.getLogger(__name__)


def column_exists(engine: Engine, table_name: str, column_name: str) -> bool:
    """Check if a column exists in a table.

    Args:
        engine: SQLAlchemy engine
        table_name: Name of the table
        column_name: Name of the column

    Returns:
        True if column exists, False otherwise
    """
    inspector = inspect(engine)
    columns = [col["name"] for col in inspector.get_columns(table_name)]
    return column_name in columns


def _add_column(engine: Engine, table_name: str, column_name: str, ddl: str) -> None:
    if column_exists(engine, table_name, column_name):
        return
    with engine.begin() as conn:
        conn.execute(text(f"ALTER TABLE {table_name} ADD COLUMN {column_name} {ddl}"))
    logger.info("added column %s.%s", table_name, column_name)


def upgrade_v1_to_v2(engine: Engine) -> None:
    """Add reconciliation and settings columns with neutral defaults."""
    _add_column(engine, "accounts", "cutoff_date", "DATE")
    _add_column(engine, "accounts", "cutoff_balance", "VARCHAR")
    _add_column(engine, "accounts", "cutoff_transaction_id", "CHAR(32)")
    _add_column(engine, "entries", "reconciled", "BOOLEAN NOT NULL DEFAULT 0")
    _add_column(engine, "books", "require_double_entry", "BOOLEAN NOT NULL DEFAULT 0")


UPGRADES: dict[int, Callable[[Engine], None]] = {
    1: upgrade_v1_to_v2,
}


def read_version(engine: Engine) -> int | None:
    """Return the stored snapshot version, or None when nothing is stored yet."""
    if "books" not in inspect(engine).get_table_names():
        return None
    with engine.connect() as conn:
        row = conn.execute(text("SELECT version FROM books LIMIT 1")).first()
    return None if row is None else int(row[0])


def upgrade_snapshot(engine: Engine, version: int) -> int:
    """Bring a stored snapshot up to SCHEMA_VERSION.

    Args:
        engine: Engine bound to the snapshot database
        version: Version the snapshot was written at

    Returns:
        The new version (always SCHEMA_VERSION)

    Raises:
        UnsupportedVersionError: If the version is newer than this build or
            has no upgrade path
    """
    if version > SCHEMA_VERSION or (version < SCHEMA_VERSION and version not in UPGRADES):
        raise UnsupportedVersionError(
            f"Unsupported snapshot version {version} (this build reads version {SCHEMA_VERSION})"
        )

    while version < SCHEMA_VERSION:
        step = UPGRADES.get(version)
        if step is None:
            raise UnsupportedVersionError(f"No upgrade path from snapshot version {version}")
        logger.info("upgrading snapshot from version %d to %d", version, version + 1)
        step(engine)
        version += 1

    with engine.begin() as conn:
        conn.execute(text("UPDATE books SET version = :version"), {"version": version})
    return version
