"""Integration tests for end-to-end workflows."""

import json

from ledgerbooks.cli.main import cli


def test_full_workflow(cli_runner, tmp_path, write_statement):
    """Accounts → transaction → schedule with modifier → generate → reconcile → dump."""
    db_path = str(tmp_path / "books.db")

    def run(*args):
        result = cli_runner.invoke(cli, ["--db-path", db_path, *args])
        assert result.exit_code == 0, result.output
        return result

    # Step 1: Create accounts
    run("account", "create", "Checking", "--type", "asset", "--starting-balance", "100")
    run("account", "create", "Salary", "--type", "revenue")
    run("account", "create", "Rent", "--type", "expense")

    # Step 2: Record pay
    run(
        "add",
        "--debit", "Checking",
        "--credit", "Salary",
        "--amount", "1000",
        "--date", "2024-01-01",
        "--description", "January pay",
    )

    # Step 3: Monthly rent, growing 10% a year
    run(
        "schedule", "add", "Rent",
        "--period", "months",
        "--start", "2024-01-31",
        "--debit", "Rent",
        "--credit", "Checking",
        "--amount", "500",
    )
    run("modifier", "add", "Increase", "--period", "years", "--start", "2023-01-31", "--percentage", "10%")
    run("schedule", "bind", "Rent", "Increase")

    # Step 4: Project three months
    result = run("generate", "--until", "2024-03-31")
    assert "Generated 3 transactions" in result.output
    assert "550.00" in result.output

    result = run("account", "balance", "Checking")
    # 100 + 1000 - 3 * 550
    assert "Balance: -550.00" in result.output

    # Step 5: Reconcile against the bank statement
    statement = write_statement(
        [
            "2024-01-01,JANUARY PAY,1000.00,1100.00",
            "2024-01-31,RENT,-550.00,550.00",
        ]
    )
    result = run("reconcile", "Checking", statement, "--commit")
    assert "Matched: 2" in result.output
    assert "Reconciled through 2024-01-31 (balance 550.00)" in result.output

    # Step 6: Dump the stored books
    result = run("dump", db_path)
    data = json.loads(result.stdout)
    assert [a["name"] for a in data["accounts"]] == ["Checking", "Salary", "Rent"]
    assert len(data["transactions"]) == 4
    checking = data["accounts"][0]
    assert checking["reconciliation"]["balance"] == "550.0000"
    assert data["scheduler"]["end_date"] == "2024-03-31"
    (schedule,) = data["scheduler"]["schedules"]
    assert schedule["modifiers"][0]["cycle_count"] == 1
