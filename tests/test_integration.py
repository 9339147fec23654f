"""Integration tests for end-to-end workflows."""

from datetime import date
from decimal import Decimal

from sqlalchemy.exc import OperationalError

from ledgerdesk.cli.main import cli
from ledgerdesk.database.sqlalchemy_db import SQLAlchemyDatabase


def _extract_id(output: str) -> str:
    # "Created account 'Cash' (ID: 3f2a...)"
    return output.split("ID:")[1].strip().rstrip(")")


def test_balance_workflow(cli_runner, cli_args):
    """Test account → transactions → sales → balance."""
    result = cli_runner.invoke(
        cli, cli_args + ["account", "create", "Cash", "--opening-balance", "1000"]
    )
    assert result.exit_code == 0
    account_id = _extract_id(result.output)

    steps = [
        ["transaction", "add", "--account", "Cash", "--amount", "200", "--type", "income"],
        ["transaction", "add", "--account", account_id, "--debit", "50", "--credit", "0"],
        ["sale", "add", "--account", "Cash", "--amount", "300", "--invoice", "INV-001"],
    ]
    for args in steps:
        result = cli_runner.invoke(cli, cli_args + args)
        assert result.exit_code == 0, result.output

    result = cli_runner.invoke(cli, cli_args + ["account", "balance", "Cash"])
    assert result.exit_code == 0
    assert "Balance: 1,450.00" in result.output

    result = cli_runner.invoke(
        cli, cli_args + ["sale", "add", "--account", "Cash", "--amount", "100", "--legacy-field"]
    )
    assert result.exit_code == 0

    result = cli_runner.invoke(cli, cli_args + ["account", "balance", "Cash", "--breakdown"])
    assert "Balance: 1,550.00" in result.output

    result = cli_runner.invoke(cli, cli_args + ["sale", "list", "--account", "Cash"])
    assert result.exit_code == 0
    assert "INV-001" in result.output
    assert "100.00" in result.output


def test_returns_workflow(cli_runner, cli_args):
    """Test login → sales returns → tax summary."""
    cli_runner.invoke(cli, cli_args + ["login", "asha"])

    result = cli_runner.invoke(
        cli,
        cli_args
        + [
            "return",
            "create",
            "--item-tax",
            "10",
            "--item-tax",
            "15",
            "--full",
            "--shipping-tax",
            "5",
            "--invoice",
            "INV-001",
        ],
    )
    assert result.exit_code == 0, result.output
    assert "Total tax impact:      30.00" in result.output

    result = cli_runner.invoke(
        cli, cli_args + ["return", "create", "--item-tax", "7", "--shipping-tax", "3"]
    )
    assert result.exit_code == 0
    assert "Shipping tax returned: 0.00" in result.output

    result = cli_runner.invoke(cli, cli_args + ["return", "tax-summary"])
    assert result.exit_code == 0
    assert "Total tax returned:    37.00" in result.output
    assert "Shipping tax returned: 5.00" in result.output

    result = cli_runner.invoke(cli, cli_args + ["return", "list"])
    assert result.exit_code == 0
    assert "INV-001" in result.output


def test_tax_summary_outside_range(cli_runner, cli_args):
    cli_runner.invoke(
        cli, cli_args + ["return", "create", "--date", "2020-05-05", "--item-tax", "10"]
    )

    result = cli_runner.invoke(
        cli,
        cli_args + ["return", "tax-summary", "--start-date", "2021-01-01", "--end-date", "2021-12-31"],
    )

    assert result.exit_code == 0
    assert "Total tax returned:    0.00" in result.output


def test_tax_summary_conflicting_periods(cli_runner, cli_args):
    result = cli_runner.invoke(
        cli, cli_args + ["return", "tax-summary", "--this-month", "--last-month"]
    )

    assert result.exit_code == 1
    assert "Only one period option" in result.output


def test_expense_workflow(cli_runner, cli_args):
    """Test adding expense entries and paging through the ledger."""
    for n in range(1, 13):
        result = cli_runner.invoke(
            cli,
            cli_args
            + [
                "expense",
                "add",
                "--amount",
                "118",
                "--tax",
                "18",
                "--reference",
                f"EXP-{n:03d}",
                "--date",
                date(2024, 1, n).isoformat(),
                "--payment-method",
                "UPI" if n % 3 == 0 else "Cash",
            ],
        )
        assert result.exit_code == 0, result.output

    result = cli_runner.invoke(cli, cli_args + ["expense", "list"])
    assert result.exit_code == 0
    assert "Showing 1 to 10 of 12 entries" in result.output
    assert "Total amount: 1,416.00" in result.output
    assert "Total CGST:   108.00" in result.output

    result = cli_runner.invoke(cli, cli_args + ["expense", "list", "--page", "2"])
    assert "Showing 11 to 12 of 12 entries" in result.output
    assert "[2]" in result.output

    result = cli_runner.invoke(cli, cli_args + ["expense", "list", "--search", "upi"])
    assert "Showing 1 to 4 of 4 entries" in result.output
    assert "Total amount: 472.00" in result.output

    result = cli_runner.invoke(cli, cli_args + ["expense", "list", "--page", "5"])
    assert result.exit_code == 1
    assert "Page 5 does not exist" in result.output


def test_expense_list_empty(cli_runner, cli_args):
    result = cli_runner.invoke(cli, cli_args + ["expense", "list"])

    assert result.exit_code == 0
    assert "No expense entries found." in result.output


def test_balance_dedupe_sales_option(cli_runner, cli_args, temp_db, sample_account):
    """A sale stored under both account fields counts twice unless deduplicated."""
    temp_db.create_sale(
        payment_amount=Decimal("300"),
        payment_account_id=sample_account.id,
        payment_account=sample_account.id,
    )

    result = cli_runner.invoke(cli, cli_args + ["account", "balance", "Test Account"])
    assert result.exit_code == 0
    assert "Balance: 1,600.00" in result.output

    result = cli_runner.invoke(
        cli, cli_args + ["account", "balance", "Test Account", "--dedupe-sales", "--breakdown"]
    )
    assert result.exit_code == 0
    assert "Balance: 1,300.00" in result.output


def test_balance_store_failure_shows_zero(cli_runner, cli_args, sample_account, monkeypatch):
    def fail(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("db gone"))

    monkeypatch.setattr(SQLAlchemyDatabase, "list_transactions", fail)

    result = cli_runner.invoke(cli, cli_args + ["account", "balance", "Test Account"])
    assert result.exit_code == 1
    assert "Error: Could not compute balance" in result.output
    assert "Balance: 0.00" in result.output

    result = cli_runner.invoke(cli, cli_args + ["account", "list"])
    assert result.exit_code == 0
    assert "Test Account" in result.output
    assert "unavailable" in result.output
