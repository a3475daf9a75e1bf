"""Snap misread OCR tokens to the nearest known receipt word."""

import re

from rapidfuzz.distance import Levenshtein

from .dictionary import ReceiptDictionary

# Largest edit distance at which a token is still snapped to a dictionary word
MAX_EDIT_DISTANCE = 2

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def edit_distance(s1: str, s2: str, max_distance: int | None = None) -> int:
    """Levenshtein distance with unit-cost insert, delete and substitute.

    With ``max_distance`` set, any distance above it comes back as
    ``max_distance + 1``.
    """
    return Levenshtein.distance(s1, s2, score_cutoff=max_distance)


def _clean(token: str) -> str:
    return _NON_ALNUM.sub("", token.lower())


def _match_case(word: str, template: str) -> str:
    """Spell ``word`` in the casing style of ``template``."""
    if template.isupper():
        return word.upper()
    if template[:1].isupper():
        return word.capitalize()
    return word


def best_match(
    cleaned: str,
    dictionary: ReceiptDictionary,
    max_distance: int = MAX_EDIT_DISTANCE,
) -> tuple[str, int] | None:
    """Return ``(word, distance)`` of the closest dictionary word within ``max_distance``.

    Ties on distance go to the higher frequency, then to the earlier entry.
    """
    best: tuple[int, int, int, str] | None = None
    for position, entry in enumerate(dictionary.entries):
        # Length difference is a lower bound on the distance.
        if abs(len(entry.word) - len(cleaned)) > max_distance:
            continue
        distance = edit_distance(cleaned, entry.word, max_distance)
        if distance > max_distance:
            continue
        key = (distance, -entry.frequency, position, entry.word)
        if best is None or key < best:
            best = key
    if best is None:
        return None
    return best[3], best[0]


def correct_token(
    token: str,
    dictionary: ReceiptDictionary,
    max_distance: int = MAX_EDIT_DISTANCE,
) -> str:
    """Correct one token against the dictionary.

    Tokens of one character and tokens with no dictionary word within
    ``max_distance`` come back unchanged. A corrected word keeps the
    token's casing style, so "TOTA1" becomes "TOTAL".
    """
    if len(token) <= 1:
        return token

    cleaned = _clean(token)
    if not cleaned:
        return token

    if cleaned in dictionary:
        return _match_case(cleaned, token)

    match = best_match(cleaned, dictionary, max_distance)
    if match is None:
        return token
    return _match_case(match[0], token)
