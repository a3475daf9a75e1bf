"""Turn raw OCR receipt text into a ReceiptData record.

Lines are normalized, classified one by one, and assembled:

- merchant: the first normalized line, as is
- date: the first date-shaped substring on any line
- items: ITEM lines seen before the totals section starts
- subtotal / tax / total: the first line of each summary role

A repeated summary role keeps its first value. A later "AMOUNT TENDERED" or
"CHANGE DUE" line reads as a total too, and letting the last match overwrite
the field would report the cash handed over instead of the receipt total.

Once a TOTAL, TAX or SUBTOTAL line has been seen the extractor is in the
totals section for good; item-shaped lines after that point (payment,
change, loyalty lines) are ignored.

When no line reads as a total, the largest amount among the last few lines
is taken instead. Both this and "last price on a line wins" are heuristics.

The extractor never raises on malformed input: every field has a default.
"""

import logging
import re
from enum import Enum

from receiptscan.domain.receipt import ZERO_PRICE, LineItem, ReceiptData

from .classifier import LineRole, classify_line
from .money import find_prices, format_price, price_value
from .normalizer import normalize_lines
from .parser_rules import ReceiptParserRules, get_default_parser_rules

logger = logging.getLogger(f"receiptscan.{__name__}")

DATE_PATTERN = re.compile(r"\d{1,2}[-/]\d{1,2}[-/]\d{2,4}|\d{4}[-/]\d{1,2}[-/]\d{1,2}")


class ExtractorState(Enum):
    SCANNING_ITEMS = "scanning_items"
    IN_TOTALS = "in_totals"


def extract_date(lines: list[str]) -> str:
    """Return the first date-shaped substring, scanning lines in order, or ""."""
    for line in lines:
        match = DATE_PATTERN.search(line)
        if match:
            return match.group(0)
    return ""


def fallback_total(lines: list[str], window: int) -> str:
    """Largest amount found in the last ``window`` lines, or ``$0.00``."""
    candidates = [price for line in lines[-window:] for price in find_prices(line)]
    if not candidates:
        return ZERO_PRICE
    return format_price(max(candidates, key=price_value))


def extract_lines(lines: list[str], rules: ReceiptParserRules | None = None) -> ReceiptData:
    """Assemble a receipt from already-normalized lines."""
    rules = rules or get_default_parser_rules()

    state = ExtractorState.SCANNING_ITEMS
    items: list[LineItem] = []
    summary: dict[LineRole, str] = {}

    for line in lines[1:]:
        result = classify_line(
            line,
            rules.role_keywords,
            min_item_name_length=rules.min_item_name_length,
            max_distance=rules.max_edit_distance,
            scale_keyword_tolerance=rules.scale_keyword_tolerance,
        )
        if result.role is LineRole.SKIP:
            continue
        if result.role is LineRole.ITEM:
            if state is ExtractorState.SCANNING_ITEMS:
                items.append(LineItem(name=result.name, price=result.price))
            else:
                logger.debug("Ignoring item-shaped line in totals section: %r", line)
            continue

        if state is ExtractorState.SCANNING_ITEMS:
            logger.debug("Totals section starts at %r", line)
            state = ExtractorState.IN_TOTALS
        summary.setdefault(result.role, result.price)

    total = summary.get(LineRole.TOTAL)
    if total is None:
        total = fallback_total(lines, rules.fallback_window)
        logger.debug("No total line found; fallback total is %s", total)

    return ReceiptData(
        merchant=lines[0] if lines else "",
        date=extract_date(lines),
        items=tuple(LineItem(name=item.name, price=format_price(item.price)) for item in items),
        subtotal=format_price(summary.get(LineRole.SUBTOTAL, ZERO_PRICE)),
        tax=format_price(summary.get(LineRole.TAX, ZERO_PRICE)),
        total=format_price(total),
    )


def extract_receipt(raw_text: str, rules: ReceiptParserRules | None = None) -> ReceiptData:
    """Extract a structured receipt from raw multi-line OCR text."""
    rules = rules or get_default_parser_rules()
    lines = normalize_lines(raw_text, rules.dictionary, rules.max_edit_distance)
    return extract_lines(lines, rules)
