"""Tests for price scanning and canonical price formatting."""

from __future__ import annotations

import re
from decimal import Decimal

import pytest

from receiptscan.receipt.money import find_prices, format_price, last_price_match, price_value

CANONICAL_PRICE = re.compile(r"^\$\d+\.\d{2}$")


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("MILK 3.49", ["3.49"]),
        ("APPLES 2 @ 1.50 3.00", ["1.50", "3.00"]),
        ("TOTAL $ 5.16", ["$ 5.16"]),
        ("EGGS $4.99", ["$4.99"]),
        ("THANK YOU", []),
        ("QTY 3", []),
        ("", []),
    ],
)
def test_find_prices(line: str, expected: list[str]) -> None:
    assert find_prices(line) == expected


def test_last_price_match_picks_rightmost_amount() -> None:
    match = last_price_match("APPLES 2 @ 1.50 3.00")
    assert match is not None
    assert match.group(0).strip() == "3.00"
    assert last_price_match("NO PRICE HERE") is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("3.49", "$3.49"),
        ("$5.16", "$5.16"),
        ("$ 12.00", "$12.00"),
        ("5.1", "$5.10"),
        ("7", "$7.00"),
        ("1,234.56", "$1234.56"),
        ("12.345", "$12.35"),
        ("0.005", "$0.01"),
        ("0.00", "$0.00"),
        ("abc", "$0.00"),
        ("", "$0.00"),
        ("1.2.3", "$0.00"),
    ],
)
def test_format_price(raw: str, expected: str) -> None:
    assert format_price(raw) == expected


@pytest.mark.parametrize("raw", ["3.49", "$ 12.00", "12.345", "garbage", "", "1.2.3", "$0.004"])
def test_format_price_is_idempotent_and_canonical(raw: str) -> None:
    once = format_price(raw)
    assert CANONICAL_PRICE.match(once)
    assert format_price(once) == once


def test_price_value_orders_amounts_numerically() -> None:
    assert price_value("12.00") > price_value("9.99")
    assert price_value("$ 3.50") == Decimal("3.50")
    assert price_value("not money") == Decimal("0.00")
