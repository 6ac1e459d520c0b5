"""Shared output formatting for CLI commands."""

from decimal import Decimal


def format_balance(amount: Decimal) -> str:
    """Format a currency amount with thousands separators and two decimals."""
    return f"{amount:,.2f}"
