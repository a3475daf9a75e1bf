"""Line normalization: invisible-character cleanup, whitespace, token correction."""

import re
import unicodedata

from .dictionary import ReceiptDictionary
from .money import BARE_AMOUNT_PATTERN
from .token_corrector import MAX_EDIT_DISTANCE, correct_token

# Zero-width and BOM characters that survive OCR text export
_ZERO_WIDTH = re.compile("[\u200b\u200c\u200d\u2060\ufeff]")
_WHITESPACE = re.compile(r"\s+")
_SURROUNDING_PUNCT = re.compile(r"^([^\w$]*)(.*?)([^\w]*)$", re.DOTALL)
# Digits and symbols only ("#12", "13%", "1.5", "10:15"): never spelling-corrected
_NO_LETTERS = re.compile(r"[\d\W_]+")

# Tokens at or below this length are left alone (initials, unit abbreviations)
MAX_UNCORRECTED_TOKEN_LENGTH = 2


def strip_invisible(text: str) -> str:
    """Remove zero-width characters and non-whitespace control/format characters."""
    text = _ZERO_WIDTH.sub("", text)
    return "".join(ch for ch in text if ch.isspace() or unicodedata.category(ch) not in ("Cc", "Cf"))


def _normalize_token(token: str, dictionary: ReceiptDictionary, max_distance: int) -> str:
    if BARE_AMOUNT_PATTERN.match(token) or _NO_LETTERS.fullmatch(token):
        return token
    if len(token) <= MAX_UNCORRECTED_TOKEN_LENGTH:
        return token

    match = _SURROUNDING_PUNCT.match(token)
    if match is None:
        return token
    leading, core, trailing = match.groups()
    if not core:
        return token
    return f"{leading}{correct_token(core, dictionary, max_distance)}{trailing}"


def normalize_line(
    raw_line: str,
    dictionary: ReceiptDictionary,
    max_distance: int = MAX_EDIT_DISTANCE,
) -> str:
    """Normalize one raw OCR line; returns "" for a line with no visible content."""
    text = _WHITESPACE.sub(" ", strip_invisible(raw_line)).strip()
    if not text:
        return ""
    return " ".join(_normalize_token(token, dictionary, max_distance) for token in text.split(" "))


def normalize_lines(
    raw_text: str,
    dictionary: ReceiptDictionary,
    max_distance: int = MAX_EDIT_DISTANCE,
) -> list[str]:
    """Split raw OCR text into normalized lines, dropping empty ones."""
    lines: list[str] = []
    for raw_line in (raw_text or "").splitlines():
        if not strip_invisible(raw_line).strip():
            continue
        normalized = normalize_line(raw_line, dictionary, max_distance)
        if normalized:
            lines.append(normalized)
    return lines
