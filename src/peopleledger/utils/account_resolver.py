"""Utility for resolving account numbers to IDs."""

from peopleledger.domain.account import AccountService


def resolve_account(account_service: AccountService, account: str | int) -> int:
    """Resolve an account ID or account number to an account ID.

    Args:
        account_service: AccountService instance
        account: Account ID (int or string representation of int) or account number

    Returns:
        Account ID

    Raises:
        ValueError: If account is not found
    """
    if isinstance(account, int):
        if account_service.get_account(account) is None:
            raise ValueError(f"Account ID {account} not found")
        return account

    # Account numbers may themselves be numeric, so an exact number match wins
    by_number = account_service.find_by_number(account)
    if by_number is not None:
        return by_number.id

    try:
        account_id = int(account)
    except (ValueError, TypeError):
        raise ValueError(f"Account '{account}' not found")

    if account_service.get_account(account_id) is None:
        raise ValueError(f"Account ID {account_id} not found")
    return account_id
