"""Exact decimal arithmetic for balances, amounts and fees"""

import re
from decimal import Decimal, DecimalException, ROUND_HALF_UP
from typing import Optional

CENTS = Decimal("0.01")

# Plain digits with an optional fraction; no exponent, underscores or signs other than "-"
_AMOUNT_PATTERN = re.compile(r"-?\d+(\.\d*)?")


def to_decimal_point(text: str) -> str:
    """Convert SWIFT decimal-comma notation ("100,50") to decimal-point ("100.50")"""
    return text.replace(",", ".")


def to_decimal_comma(text: str) -> str:
    """Convert decimal-point notation ("100.50") to SWIFT decimal-comma ("100,50")"""
    return text.replace(".", ",")


def parse_amount(text: str) -> Optional[Decimal]:
    """
    Parse decimal-point text into an exact Decimal.

    Only plain "123" / "123.45" / "123." forms are accepted. Returns None for
    empty or any other input so callers can treat it as "no value" without
    catching exceptions.
    """
    if not text:
        return None
    text = text.strip()
    if not _AMOUNT_PATTERN.fullmatch(text):
        return None
    try:
        return Decimal(text)
    except DecimalException:
        return None


def parse_fee(text: str) -> Optional[Decimal]:
    """Like parse_amount, but a message without a fee line charges nothing"""
    if not text:
        return Decimal("0")
    return parse_amount(text)


def can_transfer(balance: str, amount: str, fee: str) -> bool:
    """
    Check that balance covers amount plus fee.

    A remaining balance of exactly zero is allowed; only a strictly negative
    result is rejected. Any value that fails to parse, or arithmetic that
    leaves the decimal range, means the transfer cannot proceed.
    """
    current = parse_amount(balance)
    transferable = parse_amount(amount)
    charge = parse_fee(fee)
    if current is None or transferable is None or charge is None:
        return False
    if transferable < 0 or charge < 0:
        return False

    try:
        return current - transferable - charge >= 0
    except DecimalException:
        return False


def format_balance(value: Decimal) -> str:
    """Render a balance with 2 fraction digits, halves rounded away from zero"""
    return str(value.quantize(CENTS, rounding=ROUND_HALF_UP))


def format_swift_amount(value: Decimal, fraction_digits: int) -> str:
    """
    Render value in SWIFT decimal-comma notation with a fixed number of fraction digits.

    Example:
        (Decimal("95"), 2) → "95,00"
        (Decimal("995"), 0) → "995,"
    """
    if fraction_digits <= 0:
        return f"{value.quantize(Decimal(1), rounding=ROUND_HALF_UP)},"
    exponent = Decimal(1).scaleb(-fraction_digits)
    return to_decimal_comma(str(value.quantize(exponent, rounding=ROUND_HALF_UP)))


def fraction_digits(text: str) -> int:
    """Number of digits after the decimal separator ("." or ",") in text"""
    normalized = to_decimal_point(text)
    if "." not in normalized:
        return 0
    return len(normalized.rsplit(".", 1)[1])
