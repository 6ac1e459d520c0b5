"""Transaction domain service.

Every mutation here moves the owning account's outstanding balance in the
same database unit of work as the transaction row itself:

- create: balance += amount
- edit:   balance += new amount - original amount
- delete: balance -= amount
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from peopleledger.database.base import Database
from peopleledger.domain.clock import Clock, SystemClock
from peopleledger.domain.entities import Account as AccountEntity
from peopleledger.domain.entities import Transaction as TransactionEntity
from peopleledger.domain.errors import (
    FUTURE_DATE,
    ZERO_AMOUNT,
    AccountClosedError,
    DomainError,
    FutureDateError,
    InvalidReferenceError,
    NotFoundError,
    ZeroAmountError,
    account_closed,
    account_not_found,
    collect,
    invalid_account_selected,
    transaction_not_found,
)
from peopleledger.domain.validation import DESCRIPTION_MAX_LENGTH, check_text, clean_text

logger = logging.getLogger(__name__)


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db: Database, clock: Optional[Clock] = None):
        """Initialize transaction service.

        Args:
            db: Database instance
            clock: Source of "today" and capture timestamps
        """
        self.db = db
        self.clock = clock or SystemClock()

    def _field_errors(
        self, transaction_date: date, amount: Decimal, description: Optional[str]
    ) -> list[DomainError]:
        errors: list[DomainError] = []
        if amount == 0:
            errors.append(ZeroAmountError(ZERO_AMOUNT))
        if transaction_date > self.clock.today():
            errors.append(FutureDateError(FUTURE_DATE))
        errors += check_text(description, "Description", DESCRIPTION_MAX_LENGTH, required=True)
        return errors

    def create_transaction(
        self,
        account_id: int,
        transaction_date: date,
        amount: Decimal,
        description: str,
    ) -> int:
        """Post a transaction against an open account.

        All checks run before anything is written; one violation is raised
        as itself, several as ValidationErrors listing each of them.

        Args:
            account_id: Account to post against
            transaction_date: Date of the movement, not after today
            amount: Signed, non-zero amount
            description: Required text, at most 100 characters

        Returns:
            Transaction ID

        Raises:
            ZeroAmountError, FutureDateError, ValidationError,
            InvalidReferenceError, AccountClosedError, ValidationErrors
        """
        description = clean_text(description)
        errors = self._field_errors(transaction_date, amount, description)

        account = self.db.get_account(account_id)
        if account is None:
            errors.append(InvalidReferenceError(invalid_account_selected(account_id)))
        elif account.is_closed:
            errors.append(AccountClosedError(account_closed(account.account_number, "create")))
        collect(errors)

        transaction_id = self.db.create_transaction(
            account_id=account_id,
            transaction_date=transaction_date,
            capture_date=self.clock.now(),
            amount=amount,
            description=description,
        )
        logger.info("Transaction created for account %s, amount: %s", account_id, amount)
        return transaction_id

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID, or None if not found."""
        return self.db.get_transaction(transaction_id)

    def require_transaction(self, transaction_id: int) -> TransactionEntity:
        """Get transaction by ID or raise NotFoundError."""
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def edit_transaction(
        self,
        transaction_id: int,
        transaction_date: date,
        amount: Decimal,
        description: str,
        expected_version: Optional[int] = None,
    ) -> Decimal:
        """Edit a transaction on an open account.

        The capture date is reset to now; the account balance moves by the
        difference between the new and the original amount.

        Returns:
            The balance adjustment applied

        Raises:
            NotFoundError: If the transaction doesn't exist
            AccountClosedError: If the account is closed at edit time
            ConcurrentModificationError: If the transaction changed since it was read
            ZeroAmountError, FutureDateError, ValidationError, ValidationErrors
        """
        txn = self.require_transaction(transaction_id)

        description = clean_text(description)
        errors = self._field_errors(transaction_date, amount, description)

        account = self._account_for(txn)
        if account.is_closed:
            errors.append(AccountClosedError(account_closed(account.account_number, "edit")))
        collect(errors)

        adjustment = self.db.update_transaction(
            transaction_id=transaction_id,
            transaction_date=transaction_date,
            capture_date=self.clock.now(),
            amount=amount,
            description=description,
            expected_version=expected_version,
        )
        logger.info(
            "Transaction updated: %s, balance adjustment: %s", transaction_id, adjustment
        )
        return adjustment

    def delete_transaction(self, transaction_id: int) -> TransactionEntity:
        """Delete a transaction and reverse its effect on the balance.

        Deleting is allowed on closed accounts.

        Returns:
            The deleted transaction

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        self.require_transaction(transaction_id)
        removed = self.db.delete_transaction(transaction_id)
        logger.info(
            "Transaction deleted: %s, amount reversed: %s", transaction_id, removed.amount
        )
        return removed

    def list_transactions(self, account_id: int) -> list[TransactionEntity]:
        """List an account's transactions.

        Sorted by transaction date, then capture date, both newest first.

        Raises:
            NotFoundError: If the account doesn't exist
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        return self.db.list_transactions(account_id)

    def _account_for(self, txn: TransactionEntity) -> AccountEntity:
        account = self.db.get_account(txn.account_id)
        if account is None:
            raise NotFoundError(account_not_found(txn.account_id))
        return account
