"""Utility functions for ledgerdesk."""

from ledgerdesk.utils.date_parser import parse_date
from ledgerdesk.utils.amount_parser import parse_amount, safe_decimal

__all__ = ["parse_date", "parse_amount", "safe_decimal"]
