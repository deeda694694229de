"""Utility functions for ledgerly."""

from ledgerly.utils.date_parser import parse_date, parse_iso_date
from ledgerly.utils.amount_parser import parse_amount, round_money

__all__ = ["parse_date", "parse_iso_date", "parse_amount", "round_money"]
