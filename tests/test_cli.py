"""Tests for CLI commands."""

import json
import os
import pytest

from ledgerbooks.cli.main import cli


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "books.db")


@pytest.fixture
def run(cli_runner, db_path):
    """Invoke the CLI against the temporary database."""

    def _run(*args):
        return cli_runner.invoke(cli, ["--db-path", db_path, *args])

    return _run


@pytest.fixture
def accounts(run):
    for name, account_type in (("Checking", "asset"), ("Salary", "revenue"), ("Rent", "expense")):
        result = run("account", "create", name, "--type", account_type)
        assert result.exit_code == 0, result.output


def test_help_does_not_create_database(cli_runner, db_path):
    result = cli_runner.invoke(cli, ["--db-path", db_path, "--help"])

    assert result.exit_code == 0
    assert "account" in result.output
    assert not os.path.exists(db_path)


class TestAccountCommands:
    def test_create(self, run):
        result = run("account", "create", "Checking", "--type", "Asset", "--starting-balance", "100")

        assert result.exit_code == 0
        assert "Created account 'Checking'" in result.output
        assert "ID:" in result.output

    def test_create_requires_type(self, run):
        result = run("account", "create", "Checking")
        assert result.exit_code == 2

    def test_create_invalid_balance(self, run):
        result = run("account", "create", "Checking", "--type", "asset", "--starting-balance", "lots")

        assert result.exit_code == 1
        assert "Invalid amount format" in result.output

    def test_list_empty(self, run):
        result = run("account", "list")

        assert result.exit_code == 0
        assert "No accounts found" in result.output

    def test_list(self, run, accounts):
        result = run("account", "list")

        assert result.exit_code == 0
        lines = [line for line in result.output.splitlines() if line.startswith("ID:")]
        # Assets first, then revenue, then expenses
        assert "Checking" in lines[0]
        assert "Salary" in lines[1]
        assert "Rent" in lines[2]

    def test_delete(self, run, accounts):
        result = run("account", "delete", "Rent")

        assert result.exit_code == 0
        assert "Deleted account 'Rent'" in result.output
        assert "Rent" not in run("account", "list").output

    def test_delete_with_transactions(self, run, accounts):
        run("add", "--debit", "Checking", "--credit", "Salary", "--amount", "10", "--date", "2024-01-01")

        result = run("account", "delete", "Checking")

        assert result.exit_code == 1
        assert "Error: Cannot delete account" in result.output

    def test_delete_unknown(self, run, accounts):
        result = run("account", "delete", "Nope")

        assert result.exit_code == 1
        assert "Error: Account 'Nope' not found" in result.output


class TestAddCommand:
    def test_add(self, run, accounts):
        result = run(
            "add",
            "--debit", "Checking",
            "--credit", "Salary",
            "--amount", "1,000.00",
            "--date", "2024-01-31",
            "--description", "January pay",
        )

        assert result.exit_code == 0
        assert "Created transaction" in result.output
        assert "Amount: 1,000.00" in result.output
        assert "Balance: 1000.00" in run("account", "balance", "Checking").output
        assert "Balance: 1000.00" in run("account", "balance", "Salary").output

    def test_add_negative_amount(self, run, accounts):
        result = run("add", "--debit", "Checking", "--credit", "Salary", "--amount", "-5", "--date", "2024-01-01")

        assert result.exit_code == 1
        assert "negative" in result.output

    def test_add_invalid_date(self, run, accounts):
        result = run("add", "--debit", "Checking", "--credit", "Salary", "--amount", "5", "--date", "someday soon")

        assert result.exit_code == 1
        assert "Invalid date format" in result.output

    def test_add_unknown_account(self, run, accounts):
        result = run("add", "--debit", "Savings", "--credit", "Salary", "--amount", "5", "--date", "2024-01-01")

        assert result.exit_code == 1
        assert "Error: Account 'Savings' not found" in result.output


class TestScheduleCommands:
    @pytest.fixture
    def rent(self, run, accounts):
        result = run(
            "schedule", "add", "Rent",
            "--period", "months",
            "--start", "2024-01-31",
            "--debit", "Rent",
            "--credit", "Checking",
            "--amount", "500",
        )
        assert result.exit_code == 0, result.output

    def test_list(self, run, rent):
        result = run("schedule", "list")

        assert result.exit_code == 0
        assert "Rent" in result.output
        assert "next: 2024-01-31" in result.output

    def test_list_empty(self, run):
        assert "No schedules found" in run("schedule", "list").output

    def test_generate(self, run, rent):
        result = run("generate", "--until", "2024-04-30")

        assert result.exit_code == 0
        assert "Generated 4 transactions through 2024-04-30" in result.output
        assert "2024-02-29" in result.output
        assert "Generated through 2024-04-30" in run("schedule", "list").output
        assert "Balance: -2000.00" in run("account", "balance", "Checking").output

    def test_generate_twice_continues(self, run, rent):
        run("generate", "--until", "2024-02-29")
        result = run("generate", "--until", "2024-03-31")

        assert "Generated 1 transactions" in result.output

    def test_generate_single_schedule(self, run, rent):
        result = run("generate", "--until", "2024-02-29", "--schedule", "Rent")

        assert result.exit_code == 0
        assert "Generated 2 transactions" in result.output
        assert "Generated through" not in run("schedule", "list").output

    def test_generate_unknown_schedule(self, run, rent):
        result = run("generate", "--until", "2024-02-29", "--schedule", "Nope")

        assert result.exit_code == 1
        assert "Error: Schedule 'Nope' not found" in result.output

    def test_bind_modifier(self, run, rent):
        result = run(
            "modifier", "add", "Increase",
            "--period", "months",
            "--frequency", "2",
            "--start", "2024-01-31",
            "--percentage", "10%",
        )
        assert result.exit_code == 0, result.output

        result = run("schedule", "bind", "Rent", "Increase")
        assert result.exit_code == 0
        assert "modifier: Increase" in run("schedule", "list").output

        result = run("generate", "--until", "2024-04-30")
        assert "550.00" in result.output

    def test_bind_twice(self, run, rent):
        run("modifier", "add", "Increase", "--period", "years", "--start", "2024-01-01", "--amount", "5")
        run("schedule", "bind", "Rent", "Increase")

        result = run("schedule", "bind", "Rent", "Increase")

        assert result.exit_code == 1
        assert "already bound" in result.output

    def test_reset(self, run, rent):
        run("generate", "--until", "2024-02-29")

        result = run("schedule", "reset", "Rent")

        assert result.exit_code == 0
        assert "next: 2024-01-31" in run("schedule", "list").output


class TestReconcileCommand:
    @pytest.fixture
    def books(self, run, accounts):
        run("add", "--debit", "Checking", "--credit", "Salary", "--amount", "1000", "--date", "2024-01-01", "--description", "Pay")
        run("add", "--debit", "Rent", "--credit", "Checking", "--amount", "500", "--date", "2024-01-31", "--description", "Rent")

    def test_reconcile_dry_run(self, run, books, write_statement):
        path = write_statement(["2024-01-01,PAY,1000.00,1000.00", "2024-01-31,RENT,-500.00,500.00"])

        result = run("reconcile", "Checking", path)

        assert result.exit_code == 0
        assert "Matched: 2" in result.output
        assert "Reconciled: -" in run("account", "list").output

    def test_reconcile_commit(self, run, books, write_statement):
        path = write_statement(["2024-01-01,PAY,1000.00,1000.00", "2024-01-31,RENT,-500.00,500.00"])

        result = run("reconcile", "Checking", path, "--commit")

        assert result.exit_code == 0
        assert "Reconciled through 2024-01-31 (balance 500.00)" in result.output
        assert "Reconciled: 2024-01-31" in run("account", "list").output

        backdated = run("add", "--debit", "Checking", "--credit", "Salary", "--amount", "1", "--date", "2024-01-15")
        assert backdated.exit_code == 1
        assert "reconciliation cutoff" in backdated.output

    def test_generate_into_reconciled_period(self, run, books, write_statement):
        path = write_statement(["2024-01-01,PAY,1000.00,1000.00", "2024-01-31,RENT,-500.00,500.00"])
        run("reconcile", "Checking", path, "--commit")
        run(
            "schedule", "add", "Gym",
            "--period", "months",
            "--start", "2024-01-15",
            "--debit", "Rent",
            "--credit", "Checking",
            "--amount", "30",
        )

        result = run("generate", "--until", "2024-02-29")

        assert result.exit_code == 1
        assert "reconciliation cutoff" in result.output
        assert "next: 2024-01-15" in run("schedule", "list").output
        assert "Balance: 500.00" in run("account", "balance", "Checking").output

    def test_reconcile_mismatch(self, run, books, write_statement):
        path = write_statement(["2024-01-01,PAY,1000.00,1200.00"])

        result = run("reconcile", "Checking", path, "--commit")

        assert "Mismatch" in result.output
        assert "Nothing matched; cutoff unchanged." in result.output

    def test_reconcile_bad_statement(self, run, books, write_statement):
        path = write_statement(["2024-01-01,1000"], header="Date,Amount")

        result = run("reconcile", "Checking", path)

        assert result.exit_code == 1
        assert "missing required columns" in result.output


class TestDumpCommand:
    def test_dump(self, cli_runner, run, db_path, accounts):
        result = cli_runner.invoke(cli, ["dump", db_path])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [a["name"] for a in data["accounts"]] == ["Checking", "Salary", "Rent"]

    def test_dump_missing_file(self, cli_runner, tmp_path):
        result = cli_runner.invoke(cli, ["dump", str(tmp_path / "missing.db")])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_dump_unreadable_file(self, cli_runner, tmp_path):
        path = tmp_path / "garbage.db"
        path.write_bytes(b"not a database" * 200)

        result = cli_runner.invoke(cli, ["dump", str(path)])

        assert result.exit_code == 1
        assert "Error: Could not read snapshot" in result.output


def test_db_path_from_environment(cli_runner, db_path, monkeypatch):
    monkeypatch.setenv("LEDGERBOOKS_DB_PATH", db_path)

    result = cli_runner.invoke(cli, ["account", "create", "Checking", "--type", "asset"])

    assert result.exit_code == 0
    assert "Checking" in cli_runner.invoke(cli, ["dump", db_path]).output
