"""Shared pytest fixtures for ledgerbooks tests."""

import tempfile
import os
from datetime import date
from pathlib import Path
import pytest

from ledgerbooks.database.factories import create_sqlite_repository
from ledgerbooks.domain.entities import AccountType
from ledgerbooks.domain.factories import new_account
from ledgerbooks.domain.ledger import Ledger


@pytest.fixture
def temp_repo():
    """Create a repository over a temporary database file."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    repo = create_sqlite_repository(database_path=db_path)
    # Store the path for tests that need it
    repo.database_path = db_path
    repo.connect()
    repo.initialize_schema()

    yield repo

    # Cleanup
    repo.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def ledger():
    """An empty ledger."""
    return Ledger(name="Test Books")


@pytest.fixture
def checking(ledger):
    """An asset account added to the ledger."""
    account = new_account("Checking", AccountType.ASSET)
    ledger.add_account(account)
    return ledger.get_account(account.id)


@pytest.fixture
def salary(ledger):
    """A revenue account added to the ledger."""
    account = new_account("Salary", AccountType.REVENUE)
    ledger.add_account(account)
    return ledger.get_account(account.id)


@pytest.fixture
def groceries(ledger):
    """An expense account added to the ledger."""
    account = new_account("Groceries", AccountType.EXPENSE)
    ledger.add_account(account)
    return ledger.get_account(account.id)


@pytest.fixture
def sample_date():
    return date(2024, 1, 15)


@pytest.fixture
def write_statement(tmp_path):
    """Write statement CSV rows to a file and return its path."""

    def _write(rows, header="Date,Description,Amount,Balance", name="statement.csv"):
        path = tmp_path / name
        path.write_text("\n".join([header, *rows]) + "\n", encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
