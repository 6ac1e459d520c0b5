"""Domain model entities for peopleledger.

These are pure data classes representing business concepts, independent of
database schema. Services and the CLI only ever see these, never ORM rows.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Person:
    """Person domain entity."""

    id: int
    name: Optional[str]
    surname: Optional[str]
    id_number: str
    version: int = 1

    @property
    def full_name(self) -> str:
        return f"{self.name or ''} {self.surname or ''}".strip()


@dataclass(frozen=True)
class Account:
    """Account domain entity owned by exactly one person."""

    id: int
    person_id: int
    account_number: str
    outstanding_balance: Decimal
    is_closed: bool = False
    version: int = 1


@dataclass(frozen=True)
class Transaction:
    """Ledger entry against an account."""

    id: int
    account_id: int
    transaction_date: date
    capture_date: datetime
    amount: Decimal
    description: str
    version: int = 1


@dataclass(frozen=True)
class User:
    """Credential record used for authentication."""

    id: int
    name: str
    username: str
    password_hash: bytes = field(repr=False)
    password_salt: bytes = field(repr=False)


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity established by a successful login."""

    username: str
    display_name: str


@dataclass(frozen=True)
class PersonPage:
    """One page of a filtered person listing."""

    items: list[Person]
    page: int
    page_size: int
    total_count: int
    total_pages: int


@dataclass(frozen=True)
class AccountWithTransactions:
    """An account together with its owner and its ledger entries."""

    account: Account
    person: Optional[Person]
    transactions: list[Transaction]
