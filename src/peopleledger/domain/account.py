"""Account domain service."""

import logging
from decimal import Decimal
from typing import Optional

from peopleledger.database.base import Database
from peopleledger.domain.entities import Account as AccountEntity
from peopleledger.domain.entities import AccountWithTransactions, AuthenticatedUser
from peopleledger.domain.errors import (
    DuplicateAccountNumberError,
    InvalidReferenceError,
    NotFoundError,
    collect,
    account_not_found,
    duplicate_account_number,
    invalid_person_selected,
)
from peopleledger.domain.validation import ACCOUNT_NUMBER_MAX_LENGTH, check_text, clean_text

logger = logging.getLogger(__name__)


class AccountService:
    """Service for managing accounts.

    The outstanding balance is never set by callers: it starts at zero and
    only moves with transaction postings, or with an explicit recalculation.
    """

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(self, person_id: int, account_number: str, is_closed: bool = False) -> int:
        """Create a new account with a zero balance.

        Args:
            person_id: Owning person
            account_number: Unique account number
            is_closed: Whether the account starts closed to postings

        Returns:
            Account ID

        Raises:
            ValidationError: If the account number is missing or too long
            InvalidReferenceError: If the person doesn't exist
            DuplicateAccountNumberError: If the account number is in use
        """
        account_number = clean_text(account_number)
        errors = check_text(account_number, "Account Number", ACCOUNT_NUMBER_MAX_LENGTH, required=True)

        if self.db.get_person(person_id) is None:
            errors.append(InvalidReferenceError(invalid_person_selected(person_id)))
        if account_number is not None and self.db.find_account_by_number(account_number) is not None:
            errors.append(DuplicateAccountNumberError(duplicate_account_number(account_number)))
        collect(errors)

        account_id = self.db.create_account(
            person_id=person_id, account_number=account_number, is_closed=is_closed
        )
        logger.info("Account created: %s for person %s (ID %s)", account_number, person_id, account_id)
        return account_id

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID, or None if not found."""
        return self.db.get_account(account_id)

    def require_account(self, account_id: int) -> AccountEntity:
        """Get account by ID or raise NotFoundError."""
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def find_by_number(self, account_number: str) -> Optional[AccountEntity]:
        """Get account by its account number."""
        return self.db.find_account_by_number(account_number)

    def edit_account(
        self,
        account_id: int,
        account_number: str,
        is_closed: bool,
        expected_version: Optional[int] = None,
    ) -> None:
        """Edit an account's number and closed flag.

        Raises:
            NotFoundError: If the account doesn't exist
            DuplicateAccountNumberError: If another account holds the number
            ConcurrentModificationError: If the account changed since it was read
        """
        self.require_account(account_id)

        account_number = clean_text(account_number)
        collect(check_text(account_number, "Account Number", ACCOUNT_NUMBER_MAX_LENGTH, required=True))

        if self.db.find_account_by_number(account_number, exclude_id=account_id) is not None:
            raise DuplicateAccountNumberError(duplicate_account_number(account_number))

        self.db.update_account(
            account_id=account_id,
            account_number=account_number,
            is_closed=is_closed,
            expected_version=expected_version,
        )
        logger.info(
            "Account updated: %s (ID %s, closed=%s)", account_number, account_id, is_closed
        )

    def delete_account(self, account_id: int) -> int:
        """Delete an account together with all of its transactions.

        Returns:
            Number of transactions removed

        Raises:
            NotFoundError: If the account doesn't exist
        """
        account = self.require_account(account_id)
        removed = self.db.delete_account(account_id)
        logger.info(
            "Account deleted: %s (ID %s), %d transaction(s) removed",
            account.account_number,
            account_id,
            removed,
        )
        return removed

    def get_account_with_transactions(self, account_id: int) -> AccountWithTransactions:
        """Get an account with its owner and its transactions, newest first."""
        account = self.require_account(account_id)
        return AccountWithTransactions(
            account=account,
            person=self.db.get_person(account.person_id),
            transactions=self.db.list_transactions(account_id),
        )

    def recalculate_balance(self, account_id: int, performed_by: AuthenticatedUser) -> Decimal:
        """Reset the balance to the sum of the account's transactions.

        This is the only administrative correction path for the balance.

        Args:
            account_id: Account to reconcile
            performed_by: Identity recorded in the log line

        Returns:
            The recalculated balance
        """
        self.require_account(account_id)
        previous, recalculated = self.db.recalculate_account_balance(account_id)
        if previous != recalculated:
            logger.warning(
                "Balance of account %s corrected by %s: %s -> %s",
                account_id,
                performed_by.username,
                previous,
                recalculated,
            )
        return recalculated
