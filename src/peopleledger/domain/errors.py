"""Shared domain error messages and error types."""

from typing import Sequence


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling. ``code`` is a stable
    identifier callers can map to their own messages.
    """

    code = "Unknown"


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""

    code = "Validation"


class ZeroAmountError(ValidationError):
    """Transaction amount is zero."""

    code = "ZeroAmount"


class FutureDateError(ValidationError):
    """Transaction date lies after today."""

    code = "FutureDate"


class AccountClosedError(ValidationError):
    """Account is closed to new or edited transactions."""

    code = "AccountClosed"


class ValidationErrors(ValidationError):
    """Several independent validation failures reported together."""

    def __init__(self, errors: Sequence[DomainError]):
        self.errors = list(errors)
        super().__init__("; ".join(str(e) for e in self.errors))

    def has(self, error_type: type) -> bool:
        """Return True if any collected error is an instance of ``error_type``."""
        return any(isinstance(e, error_type) for e in self.errors)


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""

    code = "NotFound"


class InvalidReferenceError(DomainError):
    """A referenced person or account does not exist."""

    code = "InvalidReference"


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DuplicateIdNumberError(ConflictError):
    code = "DuplicateIdNumber"


class DuplicateAccountNumberError(ConflictError):
    code = "DuplicateAccountNumber"


class UsernameTakenError(ConflictError):
    code = "UsernameTaken"


class ConcurrentModificationError(ConflictError):
    """Row changed between read and write."""

    code = "ConcurrentModification"


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class HasActiveAccountsError(DependencyError):
    code = "HasActiveAccounts"


class AuthenticationError(DomainError):
    """Authentication failed."""


class InvalidCredentialsError(AuthenticationError):
    code = "InvalidCredentials"


def collect(errors: Sequence[DomainError]) -> None:
    """Raise the collected validation errors, if any.

    A single error is raised as itself; several are wrapped in
    ``ValidationErrors``.
    """
    if len(errors) == 1:
        raise errors[0]
    if errors:
        raise ValidationErrors(errors)


def person_not_found(person_id: int) -> str:
    """Return message for missing person."""
    return f"Person {person_id} not found"


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def duplicate_id_number(id_number: str) -> str:
    return f"A person with ID number '{id_number}' already exists"


def duplicate_account_number(account_number: str) -> str:
    return f"An account with number '{account_number}' already exists"


def username_taken(username: str) -> str:
    return f"Username '{username}' already exists"


def invalid_person_selected(person_id: int) -> str:
    return f"Invalid person selected: {person_id}"


def invalid_account_selected(account_id: int) -> str:
    return f"Invalid account selected: {account_id}"


def account_closed(account_number: str, action: str) -> str:
    """Return message when a closed account rejects a transaction change."""
    return f"Cannot {action} transactions on closed account '{account_number}'"


def person_delete_blocked(person_id: int, account_count: int) -> str:
    """Return message when person still owns accounts."""
    return (
        f"Cannot delete person {person_id}: it has {account_count} "
        f"account{'s' if account_count != 1 else ''}. Please delete them first."
    )


def concurrent_modification(kind: str, entity_id: int) -> str:
    return (
        f"The {kind} {entity_id} was modified by someone else. "
        "Please reload and try again."
    )


INVALID_CREDENTIALS = "Invalid username or password"
ZERO_AMOUNT = "Amount cannot be zero"
FUTURE_DATE = "Transaction date cannot be in the future"


def field_required(field_name: str) -> str:
    return f"{field_name} is required"


def field_too_long(field_name: str, max_length: int) -> str:
    return f"{field_name} cannot exceed {max_length} characters"
