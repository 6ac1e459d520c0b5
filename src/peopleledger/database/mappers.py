"""Mapper functions to convert SQLAlchemy models into domain entities.

This layer isolates the conversion logic so that column names from the
reference schema (``code``, ``person_code``, ``version_id``) never leak past
the database package.
"""

from decimal import Decimal

from peopleledger.domain import entities as domain
from peopleledger.database.models import (
    Person as ORMPerson,
    Account as ORMAccount,
    Transaction as ORMTransaction,
    User as ORMUser,
)


def person_to_domain(orm_person: ORMPerson) -> domain.Person:
    """Convert SQLAlchemy Person model to domain Person entity."""
    return domain.Person(
        id=orm_person.id,
        name=orm_person.name,
        surname=orm_person.surname,
        id_number=orm_person.id_number,
        version=orm_person.version_id,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        person_id=orm_account.person_id,
        account_number=orm_account.account_number,
        outstanding_balance=Decimal(orm_account.outstanding_balance or 0),
        is_closed=bool(orm_account.is_closed),
        version=orm_account.version_id,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        transaction_date=orm_transaction.transaction_date,
        capture_date=orm_transaction.capture_date,
        amount=Decimal(orm_transaction.amount),
        description=orm_transaction.description,
        version=orm_transaction.version_id,
    )


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        name=orm_user.name,
        username=orm_user.username,
        password_hash=bytes(orm_user.password_hash),
        password_salt=bytes(orm_user.password_salt),
    )
