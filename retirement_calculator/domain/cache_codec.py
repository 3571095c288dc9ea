"""Encoding of lifestyle deposits as cache values"""

import re
from decimal import Decimal, InvalidOperation

from retirement_calculator.domain.models import LifestyleDeposit
from retirement_calculator.utils.decimal_utils import round_to_scale, to_decimal

_RECORD_PATTERN = re.compile(r"^LifestyleType:\s*(?P<type>[^,]*),\s*Amount:\s*(?P<amount>\S+)$")


def format_amount(amount: Decimal) -> str:
    """Currency amount as a plain string at scale 2, e.g. '3000.00'"""
    return str(round_to_scale(amount))


def encode_record(record: LifestyleDeposit) -> str:
    """Value written by refresh operations: 'LifestyleType: <type>, Amount: <amount>'"""
    return f"LifestyleType: {record.lifestyle_type}, Amount: {format_amount(record.monthly_deposit)}"


def decode_decimal(raw: str) -> Decimal:
    """
    Parse a cached decimal, accepting both the bare form written at startup
    ('3000.00') and the record form written by refresh operations.

    Raises:
        ValueError: if the value is neither form or not a finite decimal
    """
    text = raw.strip()
    match = _RECORD_PATTERN.match(text)
    if match:
        text = match.group("amount")

    try:
        value = to_decimal(text)
    except InvalidOperation as e:
        raise ValueError(f"Malformed cached value: {raw!r}") from e

    if not value.is_finite():
        raise ValueError(f"Malformed cached value: {raw!r}")
    return value
