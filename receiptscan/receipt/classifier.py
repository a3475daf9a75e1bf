"""Keyword-driven classification of normalized receipt lines.

Each line is one of:
- TOTAL / TAX / SUBTOTAL: a summary line; carries its price
- ITEM: a purchase; carries a name and a price
- SKIP: no price on the line, or too little text left to name an item

Role keywords live in a declarative table (``DEFAULT_ROLE_KEYWORDS``) that is
tried in order, so the first matching role wins. Summary keywords are rarer
and more specific than item text, which is why they go first.

Keyword matching tolerates OCR noise: a role matches when the line contains
a keyword, or when one of its words is within a small edit distance of a
keyword ("tota1" still reads as "total").
"""

import re
from dataclasses import dataclass
from enum import Enum

from .money import format_price, last_price_match
from .token_corrector import MAX_EDIT_DISTANCE, edit_distance

# Residual item names shorter than this are OCR noise, not purchases
MIN_ITEM_NAME_LENGTH = 3

# Symbols dropped before keyword matching; "*", "." and "$" are kept
_MATCH_STRIP_CHARS = re.compile(r"[:;,#=~|_()\[\]{}\"'!?/\\+<>@&%^`-]")
_WHITESPACE = re.compile(r"\s+")
_HAS_LETTER = re.compile(r"[a-z]")
_ASTERISK_WORD = re.compile(r"\*+\s*([a-z0-9]+)")


class LineRole(str, Enum):
    """Classification outcome for a single line."""

    TOTAL = "total"
    TAX = "tax"
    SUBTOTAL = "subtotal"
    ITEM = "item"
    SKIP = "skip"


@dataclass(frozen=True)
class RoleKeywords:
    """Keywords that mark a summary role.

    ``exclude`` phrases are removed from the line before this role's
    keywords are tested ("subtotal" must not read as "total").
    """

    role: LineRole
    keywords: tuple[str, ...]
    exclude: tuple[str, ...] = ()


DEFAULT_ROLE_KEYWORDS: tuple[RoleKeywords, ...] = (
    RoleKeywords(
        role=LineRole.TOTAL,
        keywords=("total", "balance", "amount", "due"),
        exclude=("subtotal", "sub total"),
    ),
    RoleKeywords(
        role=LineRole.TAX,
        keywords=("tax", "hst", "gst", "pst", "vat"),
    ),
    RoleKeywords(
        role=LineRole.SUBTOTAL,
        keywords=("subtotal", "sub total"),
    ),
)

# Grand totals are often printed as "***TOTAL" or "** BALANCE"
ASTERISK_TOTAL_KEYWORDS: tuple[str, ...] = ("total", "balance", "amount")


@dataclass(frozen=True)
class LineClassification:
    """Role of one line plus what was extracted from it."""

    role: LineRole
    price: str = ""
    name: str = ""


def matching_text(line: str) -> str:
    """Lower-cased line with symbols replaced by spaces and whitespace collapsed."""
    text = _MATCH_STRIP_CHARS.sub(" ", line)
    return _WHITESPACE.sub(" ", text).strip().lower()


def keyword_tolerance(keyword: str, max_distance: int = MAX_EDIT_DISTANCE, scaled: bool = False) -> int:
    """Edit distance a word may be from ``keyword`` and still count as a match.

    Every keyword gets ``max_distance`` unless ``scaled`` is set. Scaled
    tolerance lets three-letter keywords (tax, due, gst) match only exactly
    and four-letter keywords by one edit, so words like "tea" or "ham" stay
    items.
    """
    if not scaled:
        return max_distance
    if len(keyword) <= 3:
        return 0
    if len(keyword) == 4:
        return min(1, max_distance)
    return max_distance


def _fuzzy_word_match(words: list[str], keywords: tuple[str, ...], max_distance: int, scaled: bool) -> bool:
    for word in words:
        if not _HAS_LETTER.search(word):
            continue
        for keyword in keywords:
            if " " in keyword:
                continue
            tolerance = keyword_tolerance(keyword, max_distance, scaled)
            if tolerance == 0 or abs(len(word) - len(keyword)) > tolerance:
                continue
            if edit_distance(word, keyword, tolerance) <= tolerance:
                return True
    return False


def role_matches(
    text: str,
    role_keywords: RoleKeywords,
    max_distance: int = MAX_EDIT_DISTANCE,
    scaled: bool = False,
) -> bool:
    """Return True if the matching text carries any of the role's keywords."""
    for phrase in role_keywords.exclude:
        text = text.replace(phrase, " ")
    if any(keyword in text for keyword in role_keywords.keywords):
        return True
    return _fuzzy_word_match(text.split(), role_keywords.keywords, max_distance, scaled)


def _is_asterisk_total(text: str, max_distance: int) -> bool:
    for match in _ASTERISK_WORD.finditer(text):
        word = match.group(1)
        if any(edit_distance(word, keyword, max_distance) <= max_distance for keyword in ASTERISK_TOTAL_KEYWORDS):
            return True
    return False


def _item_name(line: str, price_match: re.Match[str]) -> str:
    name = line[: price_match.start()] + " " + line[price_match.end() :]
    return _WHITESPACE.sub(" ", name).strip()


def classify_line(
    line: str,
    role_keywords: tuple[RoleKeywords, ...] = DEFAULT_ROLE_KEYWORDS,
    *,
    min_item_name_length: int = MIN_ITEM_NAME_LENGTH,
    max_distance: int = MAX_EDIT_DISTANCE,
    scale_keyword_tolerance: bool = False,
) -> LineClassification:
    """Classify one normalized line."""
    price_match = last_price_match(line)
    if price_match is None:
        return LineClassification(role=LineRole.SKIP)

    price = format_price(price_match.group(0))
    text = matching_text(line)

    for entry in role_keywords:
        if role_matches(text, entry, max_distance, scale_keyword_tolerance):
            return LineClassification(role=entry.role, price=price)
        if entry.role is LineRole.TOTAL and _is_asterisk_total(text, max_distance):
            return LineClassification(role=LineRole.TOTAL, price=price)

    name = _item_name(line, price_match)
    if len(name) < min_item_name_length:
        return LineClassification(role=LineRole.SKIP)
    return LineClassification(role=LineRole.ITEM, price=price, name=name)
