"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date, datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from peopleledger.domain.entities import (
    Person,
    Account,
    Transaction,
    User,
)


class Database(ABC):
    """Abstract database interface for peopleledger.

    Every mutating method is one atomic unit: it either commits all of its
    writes or none of them.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # User operations
    @abstractmethod
    def create_user(
        self, name: str, username: str, password_hash: bytes, password_salt: bytes
    ) -> int:
        """Create a login user. Returns user ID."""
        pass

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        """Get user by exact (case-sensitive) username."""
        pass

    @abstractmethod
    def count_users(self) -> int:
        """Count registered users."""
        pass

    # Person operations
    @abstractmethod
    def create_person(self, name: Optional[str], surname: Optional[str], id_number: str) -> int:
        """Create a person. Returns person ID."""
        pass

    @abstractmethod
    def get_person(self, person_id: int) -> Optional[Person]:
        """Get person by ID."""
        pass

    @abstractmethod
    def find_person_by_id_number(
        self, id_number: str, exclude_id: Optional[int] = None
    ) -> Optional[Person]:
        """Find a person holding ``id_number``, optionally ignoring one person."""
        pass

    @abstractmethod
    def update_person(
        self,
        person_id: int,
        name: Optional[str],
        surname: Optional[str],
        id_number: str,
        expected_version: Optional[int] = None,
    ) -> None:
        """Update all editable person fields."""
        pass

    @abstractmethod
    def delete_person(self, person_id: int) -> None:
        """Delete a person that owns no accounts."""
        pass

    @abstractmethod
    def count_persons(
        self,
        id_number_contains: Optional[str] = None,
        surname_contains: Optional[str] = None,
        account_number_contains: Optional[str] = None,
    ) -> int:
        """Count persons matching the optional substring filters."""
        pass

    @abstractmethod
    def search_persons(
        self,
        id_number_contains: Optional[str] = None,
        surname_contains: Optional[str] = None,
        account_number_contains: Optional[str] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> list[Person]:
        """List persons matching the filters, ordered by surname then name."""
        pass

    # Account operations
    @abstractmethod
    def create_account(self, person_id: int, account_number: str, is_closed: bool = False) -> int:
        """Create an account with a zero balance. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def find_account_by_number(
        self, account_number: str, exclude_id: Optional[int] = None
    ) -> Optional[Account]:
        """Find an account by number, optionally ignoring one account."""
        pass

    @abstractmethod
    def list_accounts(self, person_id: Optional[int] = None) -> list[Account]:
        """List accounts ordered by number, optionally for one person."""
        pass

    @abstractmethod
    def count_person_accounts(self, person_id: int) -> int:
        """Count accounts owned by a person."""
        pass

    @abstractmethod
    def update_account(
        self,
        account_id: int,
        account_number: str,
        is_closed: bool,
        expected_version: Optional[int] = None,
    ) -> None:
        """Update account number and closed flag. The balance is not editable here."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> int:
        """Delete an account and all of its transactions.

        Returns the number of transactions removed.
        """
        pass

    @abstractmethod
    def recalculate_account_balance(self, account_id: int) -> tuple[Decimal, Decimal]:
        """Reset the balance to the sum of the account's transactions.

        Returns (previous balance, recalculated balance).
        """
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        account_id: int,
        transaction_date: date,
        capture_date: datetime,
        amount: Decimal,
        description: str,
    ) -> int:
        """Insert a transaction and add its amount to the account balance.

        Raises AccountClosedError if the account is closed when the row is written.
        """
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def update_transaction(
        self,
        transaction_id: int,
        transaction_date: date,
        capture_date: datetime,
        amount: Decimal,
        description: str,
        expected_version: Optional[int] = None,
    ) -> Decimal:
        """Update a transaction and shift the balance by the amount change.

        Returns the balance delta applied. Raises AccountClosedError if the
        account is closed when the row is written.
        """
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> Transaction:
        """Remove a transaction and subtract its amount from the balance.

        Returns the removed transaction.
        """
        pass

    @abstractmethod
    def list_transactions(self, account_id: int) -> list[Transaction]:
        """List an account's transactions, newest transaction date first."""
        pass
