"""Monetary value scanning and canonical price formatting."""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from receiptscan.domain.receipt import ZERO_PRICE

# Optional "$", optional spaces, digits, a dot, exactly two digits.
PRICE_PATTERN = re.compile(r"\$?\s*\d+\.\d{2}")

# A whole token that is a bare number or dollar amount ("3", "3.49", "$3.49").
BARE_AMOUNT_PATTERN = re.compile(r"^\$?\d+(?:\.\d{2})?$")

_NON_AMOUNT_CHARS = re.compile(r"[^\d.]")
_CENTS = Decimal("0.01")


def find_prices(line: str) -> list[str]:
    """Return every price-shaped substring of ``line``, left to right.

    When a line has several matches the last one is the line's value:
    receipts print quantity and unit price before the extended price.
    """
    if not line:
        return []
    return [match.strip() for match in PRICE_PATTERN.findall(line)]


def last_price_match(line: str) -> re.Match[str] | None:
    """Return the match object of the last price on the line, if any."""
    last = None
    for match in PRICE_PATTERN.finditer(line or ""):
        last = match
    return last


def price_value(raw: str) -> Decimal:
    """Parse a raw price substring into a non-negative amount rounded to cents.

    Anything that is not a digit or a dot is discarded first; unparsable
    input is worth zero.
    """
    cleaned = _NON_AMOUNT_CHARS.sub("", raw or "")
    if not cleaned:
        return Decimal("0.00")
    try:
        return Decimal(cleaned).quantize(_CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return Decimal("0.00")


def format_price(raw: str) -> str:
    """Render a raw price as ``$D.DD``; never fails, unparsable input is ``$0.00``."""
    value = price_value(raw)
    if value.is_zero():
        return ZERO_PRICE
    return f"${value}"
