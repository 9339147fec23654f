"""Shared pytest fixtures for ledgerdesk tests."""

import tempfile
import os
from decimal import Decimal
import pytest

from ledgerdesk.database.factories import create_sqlite_database
from ledgerdesk.domain.account import AccountService
from ledgerdesk.domain.balance import BalanceService
from ledgerdesk.domain.expense_ledger import ExpenseService
from ledgerdesk.domain.lead_status import LeadStatusService
from ledgerdesk.domain.sale import SaleService
from ledgerdesk.domain.sales_return import SalesReturnService
from ledgerdesk.domain.session import SessionStore
from ledgerdesk.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def session_path(tmp_path):
    """Path of a session file that does not exist yet."""
    return tmp_path / "session.json"


@pytest.fixture
def session_store(session_path):
    """Create a SessionStore backed by a temporary file."""
    return SessionStore(session_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def sale_service(temp_db):
    """Create a SaleService with a temporary database."""
    return SaleService(temp_db)


@pytest.fixture
def balance_service(temp_db):
    """Create a BalanceService with a temporary database."""
    return BalanceService(temp_db)


@pytest.fixture
def sales_return_service(temp_db):
    """Create a SalesReturnService with a temporary database."""
    return SalesReturnService(temp_db)


@pytest.fixture
def expense_service(temp_db):
    """Create an ExpenseService with a temporary database."""
    return ExpenseService(temp_db)


@pytest.fixture
def lead_status_service(temp_db):
    """Create a LeadStatusService with a temporary database."""
    return LeadStatusService(temp_db)


@pytest.fixture
def sample_account(account_service):
    """Create a sample account with an opening balance of 1000."""
    account_id = account_service.create_account(name="Test Account", opening_balance=Decimal("1000"))
    return account_service.get_account(account_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def cli_args(temp_db, session_path):
    """Global CLI options pointing at the temporary stores."""
    return ["--db-path", temp_db.database_path, "--session-path", str(session_path)]
