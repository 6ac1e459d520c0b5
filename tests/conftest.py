"""Shared pytest fixtures for peopleledger tests."""

import tempfile
import os
from datetime import date, datetime
from decimal import Decimal
import pytest

from peopleledger.cli.session import SessionStore, session_path_for
from peopleledger.database.factories import create_sqlite_database
from peopleledger.domain.account import AccountService
from peopleledger.domain.clock import FixedClock
from peopleledger.domain.credentials import CredentialService
from peopleledger.domain.entities import AuthenticatedUser
from peopleledger.domain.person import PersonService
from peopleledger.domain.transaction import TransactionService

NOW = datetime(2024, 6, 15, 12, 0, 0)
TODAY = date(2024, 6, 15)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep tests away from the user's real database and session."""
    for name in ("PEOPLELEDGER_DB_PATH", "PEOPLELEDGER_DB_URL", "PEOPLELEDGER_SESSION_PATH"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    db.session_factory.kw["bind"].dispose()
    for path in (db_path, f"{db_path}.session"):
        if os.path.exists(path):
            os.unlink(path)


@pytest.fixture
def clock():
    """A clock frozen at NOW."""
    return FixedClock(NOW)


@pytest.fixture
def credential_service(temp_db):
    return CredentialService(temp_db)


@pytest.fixture
def person_service(temp_db):
    return PersonService(temp_db)


@pytest.fixture
def account_service(temp_db):
    return AccountService(temp_db)


@pytest.fixture
def transaction_service(temp_db, clock):
    return TransactionService(temp_db, clock=clock)


@pytest.fixture
def sample_person(person_service):
    """Create a sample person for testing."""
    person_id = person_service.create_person(name="Alice", surname="Smith", id_number="8001015009087")
    return person_service.get_person(person_id)


@pytest.fixture
def sample_account(account_service, sample_person):
    """Create an open account owned by the sample person."""
    account_id = account_service.create_account(person_id=sample_person.id, account_number="1002003004")
    return account_service.get_account(account_id)


@pytest.fixture
def closed_account(account_service, sample_person):
    """Create a closed account owned by the sample person."""
    account_id = account_service.create_account(
        person_id=sample_person.id, account_number="9009009009", is_closed=True
    )
    return account_service.get_account(account_id)


@pytest.fixture
def post(transaction_service):
    """Post a transaction dated TODAY and return its ID."""

    def _post(account_id: int, amount: str, description: str = "Entry", when: date = TODAY) -> int:
        return transaction_service.create_transaction(
            account_id=account_id,
            transaction_date=when,
            amount=Decimal(amount),
            description=description,
        )

    return _post


@pytest.fixture
def admin():
    return AuthenticatedUser(username="admin", display_name="Administrator")


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def logged_in(temp_db, credential_service):
    """Register a user and write a live session ticket for the temp database."""
    credential_service.register(name="Alice Smith", username="alice", password="Secret1")
    user = credential_service.verify("alice", "Secret1")
    SessionStore(session_path_for(temp_db.database_path)).start(user)
    return user


@pytest.fixture
def run(cli_runner, temp_db):
    """Invoke the CLI against the temporary database."""
    from peopleledger.cli.main import cli

    def _run(*args: str, input: str | None = None):
        return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], input=input)

    return _run
