"""Utility functions for peopleledger."""

from peopleledger.utils.date_parser import parse_date
from peopleledger.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_amount"]
