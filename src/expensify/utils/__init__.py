"""Utility functions for expensify."""

from expensify.utils.text import clean, extract_last4, pad_last4, strip_to_text
from expensify.utils.amount_parser import parse_amount_to_number
from expensify.utils.date_parser import parse_occurred_at

__all__ = [
    "clean",
    "extract_last4",
    "pad_last4",
    "strip_to_text",
    "parse_amount_to_number",
    "parse_occurred_at",
]
