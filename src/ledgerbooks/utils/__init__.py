"""Utility functions for ledgerbooks."""

from ledgerbooks.utils.date_parser import parse_date
from ledgerbooks.utils.amount_parser import parse_amount, parse_percentage

__all__ = ["parse_date", "parse_amount", "parse_percentage"]
