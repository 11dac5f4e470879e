"""Unit tests for exact decimal balance checks and amount formatting"""

import pytest
from decimal import Decimal
from mt_gateway.domain.money import (
    can_transfer,
    format_balance,
    format_swift_amount,
    fraction_digits,
    parse_amount,
    to_decimal_comma,
    to_decimal_point,
)


@pytest.mark.parametrize("swift, plain", [("100,00", "100.00"), ("5,", "5."), ("0,01", "0.01"), ("1234", "1234")])
def test_decimal_separator_conversion_is_bijective(swift: str, plain: str):
    assert to_decimal_point(swift) == plain
    assert to_decimal_comma(plain) == swift
    assert to_decimal_comma(to_decimal_point(swift)) == swift


def test_can_transfer_sufficient_funds():
    assert can_transfer("1000.00", "100.00", "5.00") is True


def test_can_transfer_exact_balance_allowed():
    """Remaining balance of exactly zero is allowed"""
    assert can_transfer("105.00", "100.00", "5.00") is True


def test_can_transfer_one_cent_short():
    assert can_transfer("104.99", "100.00", "5.00") is False


def test_can_transfer_insufficient_funds():
    assert can_transfer("50.00", "100.00", "5.00") is False


def test_can_transfer_is_exact():
    """0.1 + 0.2 style float drift must not reject an exact match"""
    assert can_transfer("0.30", "0.10", "0.20") is True


def test_can_transfer_missing_fee_charges_nothing():
    assert can_transfer("100.00", "100.00", "") is True


@pytest.mark.parametrize(
    "balance, amount, fee",
    [
        ("abc", "100.00", "5.00"),
        ("1000.00", "", "5.00"),
        ("1000.00", "1O0.00", "5.00"),
        ("1000.00", "100.00", "x"),
        ("", "100.00", "5.00"),
        ("1000.00", "NaN", "5.00"),
        ("1000.00", "-100.00", "5.00"),
    ],
)
def test_can_transfer_unparseable_values_rejected(balance: str, amount: str, fee: str):
    assert can_transfer(balance, amount, fee) is False


def test_parse_amount():
    assert parse_amount("100.50") == Decimal("100.50")
    assert parse_amount("") is None
    assert parse_amount("12,50") is None
    assert parse_amount("Infinity") is None


@pytest.mark.parametrize(
    "value, expected",
    [
        (Decimal("895"), "895.00"),
        (Decimal("895.5"), "895.50"),
        (Decimal("0.005"), "0.01"),
        (Decimal("100.00"), "100.00"),
    ],
)
def test_format_balance_two_places(value: Decimal, expected: str):
    assert format_balance(value) == expected


def test_format_swift_amount():
    assert format_swift_amount(Decimal("95.00"), 2) == "95,00"
    assert format_swift_amount(Decimal("95"), 2) == "95,00"
    assert format_swift_amount(Decimal("995"), 0) == "995,"


def test_fraction_digits():
    assert fraction_digits("100.00") == 2
    assert fraction_digits("100,5") == 1
    assert fraction_digits("100.") == 0
    assert fraction_digits("100") == 0


@pytest.mark.parametrize("text", ["1E999999999", "1e2", "1_00", "+5.00", " ", "0x10", ".5"])
def test_parse_amount_rejects_non_swift_forms(text: str):
    assert parse_amount(text) is None


def test_can_transfer_huge_exponent_rejected():
    """Exponent forms must not reach the arithmetic and overflow"""
    assert can_transfer("1000.00", "1E999999999", "5.00") is False
    assert can_transfer("1E999999999", "100.00", "5.00") is False


def test_can_transfer_underscore_amount_rejected():
    assert can_transfer("1000.00", "1_00", "0") is False
